##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Test the functionality of the Config object.
"""

from copy import copy
from types import SimpleNamespace

from docseed.config import Config


class TestConfig:
    """
    Class for testing the Config object. We'll store a valid `app_dict`
    as an attribute here so that each test doesn't have to redefine it
    each time.
    """

    app_dict = {
        "fixtures": {"path": "test/fixtures", "fallback_path": "../test/fixtures", "extensions": [".yml"]},
        "backend": {"name": "redis", "url": "redis://127.0.0.1:6379/0", "socket_timeout": 5},
        "logging": {"level": "DEBUG", "colors": False},
    }

    def test_config_creation(self):
        """
        Test the creation of the Config object. This should create a namespace for
        each section of the `app_dict` variable and save it to its attribute.
        """
        config = Config(self.app_dict)

        assert config.fixtures == SimpleNamespace(**self.app_dict["fixtures"])
        assert config.backend == SimpleNamespace(**self.app_dict["backend"])
        assert config.logging == SimpleNamespace(**self.app_dict["logging"])

    def test_missing_sections(self):
        """
        Test that sections missing from `app_dict` are left as None.
        """
        config = Config({"backend": {"name": "memory"}})
        assert config.fixtures is None
        assert config.logging is None
        assert config.backend.name == "memory"

    def test_app_dict_is_not_modified(self):
        """
        Test that building a Config doesn't turn the caller's dictionaries into namespaces.
        """
        app_dict = {"backend": {"name": "json_file", "options": {"path": "db.json"}}}
        config = Config(app_dict)
        assert app_dict == {"backend": {"name": "json_file", "options": {"path": "db.json"}}}
        assert config.backend.options.path == "db.json"

    def test_copy(self):
        """
        Test that a copy has its own section namespaces.
        """
        config = Config(self.app_dict)
        copied = copy(config)
        assert copied.backend == config.backend
        copied.backend.name = "memory"
        assert config.backend.name == "redis"

    def test_str(self):
        """
        Test that the string form lists every section and shows missing ones as None.
        """
        config_str = str(Config({"backend": {"name": "memory"}}))
        assert config_str.startswith("config:")
        assert "  backend:\n    name: 'memory'" in config_str
        assert "  fixtures:\n    None" in config_str

    def test_backend_options(self):
        """
        Test that everything but the backend name is passed on as options.
        """
        assert Config(self.app_dict).backend_options() == {"url": "redis://127.0.0.1:6379/0", "socket_timeout": 5}
        assert not Config({"backend": {"name": "memory"}}).backend_options()
        assert not Config({}).backend_options()
