"""Problems are runtime issues a program collects to report them at once."""

import logging
from .log import Severity, get_logger


class Problem:
    """Details of a runtime issue."""

    def __init__(
        self, severity: Severity, message: str, exception: BaseException | None = None
    ) -> None:
        """
        Args:
            severity (Severity): How severe the problem is.
            message (str): Description of the problem.
            exception (BaseException | None, optional): Exception that caused the
                problem. Defaults to None.
        """
        self.severity = severity
        self.message = message
        self.exception = exception

    def __str__(self) -> str:
        details = (
            " See log file for exception details." if self.exception is not None else ""
        )
        return f"[{self.severity.name}] {self.message}{details}"

    def __repr__(self) -> str:
        return f"Problem({self.severity.name}, {self.message!r})"


class ProblemList(list[Problem]):
    """List of problems that logs every problem added to it."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """
        Args:
            logger (logging.Logger | None, optional): Logger to write added problems
                to. Defaults to the vergil.problems logger.
        """
        super().__init__()
        self.logger = logger or get_logger(__name__)

    def add(
        self,
        problem: Problem | Severity,
        message: str | None = None,
        exception: BaseException | None = None,
    ) -> Problem:
        """Add a problem and log it.

        Args:
            problem (Problem | Severity): The problem or the severity of a new problem.
            message (str | None, optional): Message of the new problem. Required if
                a severity is passed. Defaults to None.
            exception (BaseException | None, optional): Exception of the new problem.
                Defaults to None.

        Returns:
            Problem: The added problem.
        """
        if isinstance(problem, Severity):
            if message is None:
                raise ValueError("A message is required to create a problem.")
            problem = Problem(problem, message, exception)

        self.append(problem)
        self.logger.log(
            problem.severity.level,
            problem.message,
            exc_info=(
                (type(problem.exception), problem.exception, problem.exception.__traceback__)
                if problem.exception is not None
                else None
            ),
        )
        return problem

    def of_severity(self, severity: Severity) -> list[Problem]:
        return [problem for problem in self if problem.severity is severity]

    def __str__(self) -> str:
        return "\n".join(str(problem) for problem in self)
