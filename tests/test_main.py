import os
import unittest
from unittest import mock

from bucket_index import __main__ as entry
from bucket_index.settings import AppSettings


class InitializeTests(unittest.TestCase):
    def setUp(self):
        entry._initialized = False
        self.addCleanup(setattr, entry, "_initialized", False)

    def test_initialize_runs_once(self):
        with mock.patch("faulthandler.enable") as enable, mock.patch("logging.basicConfig") as basic_config:
            entry.initialize("DEBUG")
            entry.initialize("INFO")

        enable.assert_called_once_with()
        basic_config.assert_called_once()
        self.assertEqual("DEBUG", basic_config.call_args.kwargs["level"])


class MainTests(unittest.TestCase):
    def test_main_exits_without_bucket(self):
        settings_storage = mock.Mock()
        settings_storage.load.return_value = AppSettings()
        environ = {name: value for name, value in os.environ.items() if name != "BUCKET"}

        with mock.patch.dict(os.environ, environ, clear=True), \
                mock.patch.object(entry, "SettingsStorage", return_value=settings_storage), \
                mock.patch.object(entry, "initialize"), \
                mock.patch.object(entry, "create_app") as create_app:
            with self.assertRaises(SystemExit):
                entry.main()

        create_app.assert_not_called()

    def test_main_serves_bucket_from_environment(self):
        settings_storage = mock.Mock()
        settings_storage.load.return_value = AppSettings(host="0.0.0.0", port=9000)

        with mock.patch.dict(os.environ, {"BUCKET": "media"}), \
                mock.patch.object(entry, "SettingsStorage", return_value=settings_storage), \
                mock.patch.object(entry, "initialize"), \
                mock.patch.object(entry, "BucketStorageService") as service_cls, \
                mock.patch.object(entry, "create_app") as create_app:
            entry.main()

        service_cls.assert_called_once_with("media", profile=None)
        create_app.return_value.run.assert_called_once_with(host="0.0.0.0", port=9000)


if __name__ == "__main__":
    unittest.main()
