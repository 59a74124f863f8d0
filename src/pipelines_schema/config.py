"""Configuration constants for pipelines-schema.

Values are read through scitrera-app-framework ``Variables.environ(...)``;
each option is declared as an environment key plus its default.
"""

from enum import Enum
from pathlib import Path

# ============================================
# Data Home Directory
# ============================================
PIPELINES_SCHEMA_DATA_DIR = 'PIPELINES_SCHEMA_DATA_DIR'

# ============================================
# Static Fallback Schema
# ============================================
PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE = 'PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE'
DEFAULT_PIPELINES_SCHEMA_CUSTOM_SCHEMA_FILE = ''

PIPELINES_SCHEMA_INSTALL_DIR = 'PIPELINES_SCHEMA_INSTALL_DIR'
DEFAULT_PIPELINES_SCHEMA_INSTALL_DIR = str(Path(__file__).parent)

BUNDLED_SCHEMA_FILE_NAME = 'service-schema.json'

# ============================================
# Global Storage (fetched schemas)
# ============================================
PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR = 'PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR'
DEFAULT_PIPELINES_SCHEMA_GLOBAL_STORAGE_DIR = 'global-storage'

# ============================================
# Source Control
# ============================================
PIPELINES_SCHEMA_SOURCE_CONTROL = 'PIPELINES_SCHEMA_SOURCE_CONTROL'
DEFAULT_PIPELINES_SCHEMA_SOURCE_CONTROL = 'git'

PIPELINES_SCHEMA_GIT_EXECUTABLE = 'PIPELINES_SCHEMA_GIT_EXECUTABLE'
DEFAULT_PIPELINES_SCHEMA_GIT_EXECUTABLE = 'git'


# ============================================
# Identity Provider
# ============================================
class IdentityProviderType(str, Enum):
    """Available identity provider types."""

    ENVIRONMENT = "environment"  # bearer tokens configured per tenant


PIPELINES_SCHEMA_IDENTITY_PROVIDER = 'PIPELINES_SCHEMA_IDENTITY_PROVIDER'
DEFAULT_PIPELINES_SCHEMA_IDENTITY_PROVIDER = IdentityProviderType.ENVIRONMENT.value

# comma-separated list of tenant:token pairs
PIPELINES_SCHEMA_SESSIONS = 'PIPELINES_SCHEMA_SESSIONS'
DEFAULT_PIPELINES_SCHEMA_SESSIONS = ''

# ============================================
# Azure DevOps REST API
# ============================================
PIPELINES_SCHEMA_DEVOPS_BASE_URL = 'PIPELINES_SCHEMA_DEVOPS_BASE_URL'
DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL = 'https://dev.azure.com'

PIPELINES_SCHEMA_VSSPS_BASE_URL = 'PIPELINES_SCHEMA_VSSPS_BASE_URL'
DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL = 'https://app.vssps.visualstudio.com'

PIPELINES_SCHEMA_HTTP_TIMEOUT = 'PIPELINES_SCHEMA_HTTP_TIMEOUT'
DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT = 30.0

DEVOPS_API_VERSION = '7.1'

# ============================================
# Workspace State
# ============================================
PIPELINES_SCHEMA_WORKSPACE_STATE = 'PIPELINES_SCHEMA_WORKSPACE_STATE'
DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE = 'sqlite'

PIPELINES_SCHEMA_WORKSPACE_STATE_PATH = 'PIPELINES_SCHEMA_WORKSPACE_STATE_PATH'
DEFAULT_PIPELINES_SCHEMA_WORKSPACE_STATE_PATH = 'workspace-state.db'

# workspace-state key holding the persisted organization choices
ORGANIZATION_DETAILS_STATE_KEY = 'azurePipelinesDetails'


# ============================================
# Prompts
# ============================================
class PromptProviderType(str, Enum):
    """Available prompt providers."""

    HEADLESS = "headless"  # never shows anything; every prompt is declined
    CONSOLE = "console"  # click prompts on the controlling terminal


PIPELINES_SCHEMA_PROMPT = 'PIPELINES_SCHEMA_PROMPT'
DEFAULT_PIPELINES_SCHEMA_PROMPT = PromptProviderType.HEADLESS.value

# ============================================
# Notification Channel
# ============================================
PIPELINES_SCHEMA_NOTIFICATION_CHANNEL = 'PIPELINES_SCHEMA_NOTIFICATION_CHANNEL'
DEFAULT_PIPELINES_SCHEMA_NOTIFICATION_CHANNEL = 'log'
