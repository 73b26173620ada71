"""Constants for AI generation routes."""

GENERATE_SEO_PATH = "/generate-seo"
GENERATE_EXCERPT_PATH = "/generate-excerpt"
GENERATE_IMAGE_PATH = "/generate-image"
GENERATE_BLOG_DRAFT_PATH = "/generate-blog-draft"
STATUS_PATH = "/status"
