API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"
FUNCTIONS_PREFIX = f"/functions/{API_VERSION}"
