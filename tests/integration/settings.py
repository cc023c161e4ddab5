API_PREFIX = "/api"
ADMIN_KEY = "integration-admin-key"
