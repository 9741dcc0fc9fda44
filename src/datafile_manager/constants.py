"""Constants for datafile-manager."""

# Namespace directory created under the base directory
ROOT_FOLDER_NAME = "DataFileManager"

# Application identity used for platform directories
APP_NAME = "datafile-manager"
APP_AUTHOR = "datafile-manager"

# Configuration file (inside the platform config directory)
CONFIG_FILE = "config.yaml"

# Environment overrides
ENV_BASE_DIR = "DATAFILE_MANAGER_BASE_DIR"
ENV_NAMESPACE = "DATAFILE_MANAGER_NAMESPACE"

# Version
PACKAGE_VERSION = "0.1.0"
