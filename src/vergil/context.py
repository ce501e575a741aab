"""Program context bundling the log, the configuration and the problem list."""

from dataclasses import dataclass, field
from pathlib import Path
import logging
from .configuration.config import Config
from .configuration.text_config import TextConfig
from .configuration.xml_config import XMLConfig
from .globals import DEFAULT_LOG_NAME, DEFAULT_TEXT_CONFIG_NAME, DEFAULT_XML_CONFIG_NAME
from .log import configure_log
from .problems import ProblemList


@dataclass
class ProgramContext:
    """Shared state of a program run. Create once via ProgramContext.initialize and
    pass it to whatever needs it."""

    log: logging.Logger
    config: Config
    problems: ProblemList = field(default_factory=ProblemList)

    @classmethod
    def initialize(
        cls, directory: str | Path = ".", log_name: str = DEFAULT_LOG_NAME
    ) -> "ProgramContext":
        """Set up logging and load the program's configuration.

        Config.xml is used if it exists in directory, else Config.txt (created if
        missing).

        Args:
            directory (str | Path, optional): Directory holding the log and config
                files. Defaults to "." (the working directory).
            log_name (str, optional): File name of the log. Defaults to "Log.txt".

        Raises:
            MalformedConfig: If the config file can't be read.

        Returns:
            ProgramContext: The initialized context.
        """
        directory = Path(directory)
        log = configure_log(directory / log_name)

        config: Config
        if (xml_path := directory / DEFAULT_XML_CONFIG_NAME).exists():
            config = XMLConfig(xml_path)
        else:
            config = TextConfig(directory / DEFAULT_TEXT_CONFIG_NAME)
        if config.debug:
            log.setLevel(logging.DEBUG)

        log.info(f"Program started with {config!r}.")
        return cls(log, config, ProblemList(log))

    @property
    def debug(self) -> bool:
        return self.config.debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self.config.debug = value
