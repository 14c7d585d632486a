"""APPTNU 会員登録・管理ポータル"""

__version__ = "1.0.0"
