"""Files manager settings: blob storage, sessions, pagination, serving."""

from server.settings.components import config

# Local directory holding uploaded blobs
FOLDER_PATH = config('FOLDER_PATH', default='/tmp/files_manager')

# Lifetime of a session token in seconds (24 hours)
SESSION_TTL = config('SESSION_TTL', cast=int, default=86400)

# Number of records returned per page by the listing endpoint
FILES_PAGE_SIZE = config('FILES_PAGE_SIZE', cast=int, default=20)

# Widths of the thumbnails generated for image uploads
THUMBNAIL_WIDTHS = (500, 250, 100)

# API server host and port
API_HOST = config('API_HOST', default='0.0.0.0')
API_PORT = config('API_PORT', cast=int, default=5000)
