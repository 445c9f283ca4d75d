from .provider import ConfigProvider, EnvConfigProvider, QueueConfig

__all__ = ["ConfigProvider", "EnvConfigProvider", "QueueConfig"]
