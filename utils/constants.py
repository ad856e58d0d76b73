JOBS_COLLECTION = "jobs"
USERS_COLLECTION = "users"
SEED_MARKER_FIELD = "seeded"

EMPLOYMENT_TYPES = ["Full-time", "Part-time", "Internship", "Freelance"]
EXPERIENCE_LEVELS = ["Entry-level", "Mid-level", "Senior"]
LOCATION_BUCKETS = ["Dhaka", "Remote", "Other"]

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"
ALLOWED_ROLES = {ROLE_USER, ROLE_ADMIN, ROLE_SUPER_ADMIN}
ADMIN_ROLES = [ROLE_ADMIN, ROLE_SUPER_ADMIN]

WRITE_MODE_BATCH = "batch"
WRITE_MODE_CONCURRENT = "concurrent"
ALLOWED_WRITE_MODES = {WRITE_MODE_BATCH, WRITE_MODE_CONCURRENT}
DEFAULT_WRITE_MODE = WRITE_MODE_BATCH

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
FIREBASE_AUTH_BASE_URL = "https://identitytoolkit.googleapis.com/v1"
FIRESTORE_MAX_BATCH_WRITES = 500
FIRESTORE_LIST_PAGE_SIZE = 300
FIRESTORE_TIMEOUT_SECONDS = 15.0
AUTO_ID_LENGTH = 20

CREATED = "created"
UPDATED = "updated"
NO_SESSION = "no_session"
FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
INVALID_ROLE = "invalid_role"
STORE_ERROR = "store_error"

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_INTERNAL_ERROR = 500
