import logging
from typing import Iterator

import pytest

from generic_tool_lib import new_function_tool
from generic_tool_lib.llm_core import get_logger, setup_logging


@pytest.fixture
def clean_root_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("generic_tool_lib")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_get_logger_names() -> None:
    assert get_logger().name == "generic_tool_lib"
    assert get_logger("registry").name == "generic_tool_lib.registry"
    assert get_logger("generic_tool_lib.llm_core.tools").name == "generic_tool_lib.llm_core.tools"


def test_setup_logging_adds_single_stream_handler(clean_root_logger: logging.Logger) -> None:
    setup_logging(level=logging.DEBUG)
    setup_logging(level=logging.DEBUG)

    stream_handlers = [h for h in clean_root_logger.handlers if not isinstance(h, logging.NullHandler)]
    assert len(stream_handlers) == 1
    assert clean_root_logger.level == logging.DEBUG


def test_registration_is_logged(add_tool, llm_request, caplog: pytest.LogCaptureFixture) -> None:  # type: ignore[no-untyped-def]
    with caplog.at_level(logging.INFO, logger="generic_tool_lib"):
        add_tool.register_into(llm_request)

    assert "Registered tool 'add' into request." in caplog.text


def test_tool_creation_and_invocation_are_logged(add_tool, context, caplog: pytest.LogCaptureFixture) -> None:  # type: ignore[no-untyped-def]
    with caplog.at_level(logging.DEBUG, logger="generic_tool_lib"):
        new_function_tool(add_tool.config, lambda ctx, args: args, input_type=dict, output_type=dict)
        add_tool.invoke(context, {"a": 1, "b": 2})

    assert "Created function tool 'add'." in caplog.text
    assert "Invoking handler of tool 'add'." in caplog.text
