import logging

from todo_storage.logging_setup import setup_logging


class TestSetupLogging:
    def test_single_handler_after_repeated_calls(self):
        logger = setup_logging(logging.INFO)
        setup_logging(logging.DEBUG)

        owned = [h for h in logger.handlers if type(h).__name__ == "_PackageHandler"]
        assert len(owned) == 1
        assert owned[0].level == logging.DEBUG
        assert logger.level == logging.DEBUG
        assert logger.propagate is True

    def test_records_still_reach_root_handlers(self, caplog):
        setup_logging(logging.INFO)
        with caplog.at_level(logging.INFO, logger="todo_storage"):
            logging.getLogger("todo_storage.storage").info("hello")
        assert any(r.getMessage() == "hello" for r in caplog.records)
