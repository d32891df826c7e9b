"""Application configuration"""

import logging
from dotenv import load_dotenv

load_dotenv()

from .loader import load_raw_config
from .core import Core
from .hashnode import Hashnode
from .cache import Cache
from .web import Web
from .features import Features

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
logging.getLogger("discord.http").setLevel(logging.WARNING)

_RAW_CONFIG = load_raw_config()

core = Core(_RAW_CONFIG)
hashnode = Hashnode(_RAW_CONFIG)
cache = Cache(_RAW_CONFIG)
web = Web(_RAW_CONFIG)
features = Features(_RAW_CONFIG)


class Config:
    core = core
    hashnode = hashnode
    cache = cache
    web = web
    features = features


__all__ = ["core", "hashnode", "cache", "web", "features", "Config"]
