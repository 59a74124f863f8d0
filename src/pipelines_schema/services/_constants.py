"""
Centralized extension point constants for all pipelines-schema services.

All EXT_* constants are defined here to avoid circular import issues.
Individual service base modules re-export the relevant constants.
"""

# ============================================
# Collaborators
# ============================================
EXT_SOURCE_CONTROL_SERVICE = 'pipelines-schema-source-control-service'
EXT_IDENTITY_PROVIDER = 'pipelines-schema-identity-provider'
EXT_WORKSPACE_STATE_SERVICE = 'pipelines-schema-workspace-state-service'
EXT_PROMPT_SERVICE = 'pipelines-schema-prompt-service'
EXT_NOTIFICATION_CHANNEL = 'pipelines-schema-notification-channel'
EXT_DEVOPS_CLIENT_FACTORY = 'pipelines-schema-devops-client-factory'

# ============================================
# Resolution core
# ============================================
EXT_SESSION_CACHE = 'pipelines-schema-session-cache'
EXT_SCHEMA_FETCHER = 'pipelines-schema-schema-fetcher'
EXT_SESSION_MATCHER = 'pipelines-schema-session-matcher'
EXT_IDENTITY_RESOLVER = 'pipelines-schema-identity-resolver'
EXT_ASSOCIATION_NOTIFIER = 'pipelines-schema-association-notifier'
EXT_DISAMBIGUATOR = 'pipelines-schema-disambiguator'
EXT_RESOLUTION_SERVICE = 'pipelines-schema-resolution-service'
EXT_ASSOCIATION_PUBLISHER = 'pipelines-schema-association-publisher'
