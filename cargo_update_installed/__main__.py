"""python -m cargo_update_installed"""

from cargo_update_installed.cli import main

if __name__ == "__main__":
    main()
