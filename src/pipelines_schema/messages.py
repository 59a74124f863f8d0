"""User-facing message templates."""

SIGN_IN_FOR_ENHANCED_INTELLISENSE = "Sign in to Azure for enhanced Azure Pipelines IntelliSense."
SIGN_IN_LABEL = "Sign In"
WAIT_FOR_AZURE_SIGN_IN = "Waiting for Azure sign in"

SELECT_ORGANIZATION_FOR_ENHANCED_INTELLISENSE = (
    "Select the Azure DevOps organization associated with the {workspace} repository "
    "for enhanced Azure Pipelines IntelliSense."
)
SELECT_ORGANIZATION_LABEL = "Select organization"
SELECT_ORGANIZATION_PLACEHOLDER = "Select the Azure DevOps organization associated with the {workspace} repository"

UNABLE_TO_ACCESS_ORGANIZATION = (
    'Unable to access the "{organization}" organization. '
    "Make sure you're signed in with an account that has access to it."
)
