"""Constants shared across the identity provider."""

# Delimiter accepted in logical group ids in place of "/"
GROUP_PATH_DELIMITER = " ¦ "

# Separator of Keycloak group paths
GROUP_PATH_SEPARATOR = "/"

# Administrator group reserved by the workflow engine
WORKFLOW_ADMIN_GROUP = "camunda-admin"

GROUP_TYPE_SYSTEM = "SYSTEM"
GROUP_TYPE_WORKFLOW = "WORKFLOW"

# Sentinel for "no upper bound" on query paging
MAX_RESULTS_UNBOUNDED = 2**31 - 1

DEFAULT_MAX_RESULT_SIZE = 250
DEFAULT_USER_ID_CUSTOM_ATTRIBUTE = "LDAP_ID"
