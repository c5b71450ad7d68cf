"""Services wrapping the gcloud CLI."""
