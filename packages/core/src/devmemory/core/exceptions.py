"""Dev Memory 异常体系

ValidationError / NotFoundError 由持有校验的服务在本地抛出；
StoreError 透传底层持久化错误信息，不重试、不吞掉；
StartupError 表示启动时存储不可达，进程必须拒绝对外服务。
"""


class DevMemoryError(Exception):
    """Dev Memory 基础异常"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DevMemoryError):
    """必填字段缺失或为空（调用方可修正）"""


class NotFoundError(DevMemoryError):
    """引用的记录不存在"""


class StoreError(DevMemoryError):
    """底层存储失败

    message 保留底层异常信息，原始异常通过 __cause__ 链接。
    """


class StartupError(DevMemoryError):
    """启动时存储不可达（致命）"""
