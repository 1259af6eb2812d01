import logging

from supplierml.utils.logging_utils import get_logger


def test_loggers_live_under_package_logger():
    package_logger = get_logger()

    assert package_logger.name == "supplierml"
    assert package_logger.handlers
    assert get_logger("supplierml.models.trainer").name == "supplierml.models.trainer"
    assert get_logger("scripts").name == "supplierml.scripts"


def test_root_logger_is_left_alone():
    root_handlers = list(logging.getLogger().handlers)
    get_logger("supplierml.api.main")
    assert logging.getLogger().handlers == root_handlers
