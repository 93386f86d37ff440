from typing import Literal


existing_cloud_providers = Literal["gcp", "aws"]


PROVIDER_DISPLAY_NAMES: dict[str, str] = {
    "gcp": "Google Cloud Platform (GCP)",
    "aws": "Amazon Web Services (AWS)",
}
