import json
import logging
import os
from datetime import datetime

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
}

logging.basicConfig(
    level=_LEVELS.get(os.environ.get("KB_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - [%(threadName)s] %(message)s'
)
logger = logging.getLogger("kb_engine")


class FatalInputError(Exception):
    """命令行入口无法继续时由 log_msg("ERROR", ...) 抛出。"""


def set_log_level(level: str):
    """调整引擎日志级别（DEBUG 时输出逐条评分明细）。"""
    logger.setLevel(_LEVELS.get(level.upper(), logging.INFO))


def log_msg(level: str, msg: str):
    """
    记录文本日志。ERROR 级别记录后抛出 FatalInputError。

    检索引擎内部只使用 DEBUG / INFO / WARNING，降级路径一律 WARNING；
    ERROR 仅供命令行入口在输入不可用时终止流程。

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
        msg: 日志内容
    """
    level = level.upper()
    if level == "ERROR":
        logger.error(msg)
        raise FatalInputError(msg)
    if level in _LEVELS:
        logger.log(_LEVELS[level], msg)
    else:
        logger.info(f"[{level}] {msg}")


def log_json(data: dict, filename: str = "query_log.json"):
    """
    将一次问答的结构化摘要追加为一行 JSON（JSON Lines）。

    Args:
        data: 要记录的字典数据
        filename: 日志文件路径，所在目录不存在时自动创建
    """
    record = {"timestamp": datetime.now().isoformat(timespec="seconds"), **data}

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, 'a', encoding='utf-8') as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")
