"""Schema resolution for Azure Pipelines YAML files.

Decides which validation schema governs a pipeline file in a workspace folder:
an organization-specific schema fetched from Azure DevOps, or a static fallback.
"""

__version__ = "0.1.0"
