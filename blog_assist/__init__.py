"""AI-assisted authoring backend for the CMS."""
