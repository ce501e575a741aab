from .configuration import Config, TextConfig, XMLConfig
from .context import ProgramContext
from .exceptions_warnings import (
    ConversionError,
    KeyNotFound,
    MalformedConfig,
    MalformedDocument,
    VergilError,
)
from .log import Severity, configure_log, get_logger
from .problems import Problem, ProblemList
from .result import ErrorKind, Lookup
from .xml import MISSING, Node, XMLFile, XMLLeaf, XMLNode, XMLSection
