"""Constants for the S3 Website Deployer."""

# Tool identity
TOOL_NAME = "s3-website-deployer"

# Execution modes
MODE_LIVE = "live"
MODE_MOCK = "mock"

# Emulator (LocalStack) endpoints used in mock mode
MOCK_ENDPOINT_URL = "http://s3.localhost.localstack.cloud:4566"
MOCK_CLI_ENDPOINT_URL = "http://localhost:4566"
MOCK_REGION = "us-east-1"
MOCK_ACCESS_KEY_ID = "test"
MOCK_SECRET_ACCESS_KEY = "test"

# Defaults
DEFAULT_REGION = "us-east-1"
DEFAULT_BUCKET_NAME = "bucket-web-2024"
DEFAULT_BUILD_DIR = "dist"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Object key bases
KEY_BASE_ROOT = "root"
KEY_BASE_CWD = "cwd"

# Website hosting
INDEX_DOCUMENT = "index.html"
POLICY_VERSION = "2012-10-17"
POLICY_SID_PUBLIC_READ = "PublicReadGetObject"

# Website endpoint URL styles
WEBSITE_URL_DASH = "http://{bucket}.s3-website-{region}.amazonaws.com"
WEBSITE_URL_DOT = "http://{bucket}.s3-website.{region}.amazonaws.com"

# Operation names
OP_CREATE_BUCKET = "create_bucket"
OP_RELAX_PUBLIC_ACCESS_BLOCK = "relax_public_access_block"
OP_APPLY_PUBLIC_READ_POLICY = "apply_public_read_policy"
OP_ENABLE_WEBSITE_HOSTING = "enable_website_hosting"
OP_GET_WEBSITE_CONFIG = "get_website_config"
OP_DISABLE_WEBSITE_HOSTING = "disable_website_hosting"
OP_UPLOAD_FILE = "upload_file"
OP_SYNC_DIRECTORY = "sync_directory"

# Service error codes
ERR_BUCKET_ALREADY_OWNED = "BucketAlreadyOwnedByYou"
ERR_NO_SUCH_WEBSITE = "NoSuchWebsiteConfiguration"
