"""Lifecycle event names shared by the orchestrator, runner and plugins."""

from enum import Enum


class Events(str, Enum):
    """Supported events."""
    INIT = "init"
    CLI = "cli"

    BEFORE_FILE_READ = "before_file_read"
    AFTER_FILE_READ = "after_file_read"
    AFTER_TESTS_READ = "after_tests_read"

    BEGIN = "begin"
    END = "end"

    BEGIN_SESSION = "begin_session"
    END_SESSION = "end_session"

    BEGIN_SUITE = "begin_suite"
    END_SUITE = "end_suite"

    BEGIN_STATE = "begin_state"
    END_STATE = "end_state"
    SKIP_STATE = "skip_state"

    TEST_RESULT = "test_result"
    UPDATE_RESULT = "update_result"
    CAPTURE = "capture"
    RETRY = "retry"

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    INTERRUPT = "interrupt"


ALL_EVENTS = list(Events)
