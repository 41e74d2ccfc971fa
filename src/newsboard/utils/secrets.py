"""Google Cloud Secret Manager access for the news API key."""

from google.cloud import secretmanager

from newsboard.utils.logging import get_logger

logger = get_logger(__name__)


def read_secret(project_id: str, secret_id: str) -> str:
    """Return the latest version of ``secret_id`` in ``project_id``."""
    name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
    logger.info("Reading secret", project_id=project_id, secret_id=secret_id)
    client = secretmanager.SecretManagerServiceClient()
    response = client.access_secret_version(request={"name": name})
    return response.payload.data.decode("UTF-8")
