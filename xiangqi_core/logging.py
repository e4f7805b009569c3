"""
中央日志配置

核心模块只使用 loguru 的 logger，不在导入时写文件；
命令行和 API 入口调用 configure_logging 添加文件输出。
"""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(log_dir: Path | str | None = None, level: str = "INFO") -> None:
    """配置 logger

    Args:
        log_dir: 日志目录，给出时额外写入 ``<log_dir>/xiangqi.log``
        level: 控制台日志级别
    """
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "xiangqi.log",
            rotation="10 MB",
            retention="7 days",
            level="DEBUG",
        )


__all__ = ["logger", "configure_logging"]
