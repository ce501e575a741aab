XML_DECLARATION = '<?xml version="1.0" encoding="utf-8" ?>'
XML_INDENT = "\t"
XML_NEWLINE = "\n"

COMMENT_CHARACTERS = (" ", "\t", "\n", "#")
"""Leading characters that make a text config line insignificant."""
DEFAULT_DELIMITER = "="

DEFAULT_TEXT_CONFIG_NAME = "Config.txt"
DEFAULT_XML_CONFIG_NAME = "Config.xml"
DEFAULT_LOG_NAME = "Log.txt"

DEBUG_KEY = "debug"

