"""cargo-update-installed: 按原始安装参数重新安装 cargo 已安装的包"""

__version__ = "0.3.0"
