##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
Docseed's configuration.
"""

import os


APP_FILENAME: str = "docseed.yaml"
USER_HOME: str = os.path.expanduser("~")
DOCSEED_HOME: str = os.path.join(USER_HOME, ".docseed")
CONFIG_PATH_FILE: str = os.path.join(DOCSEED_HOME, "config_path.txt")

DEFAULT_FIXTURES_PATH: str = os.path.join("test", "fixtures")
