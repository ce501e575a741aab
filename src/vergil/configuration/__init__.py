from .config import Config
from .text_config import TextConfig
from .xml_config import XMLConfig
