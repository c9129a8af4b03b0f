"""Built-in configuration defaults.

Values use ``${VAR:default}`` references that are expanded at load time;
references that expand to an empty string fall back to the schema defaults.
"""

from typing import Any, Dict

CONFIG_FILE_ENV = "CLOUDTAG_CONFIG_FILE"

DEFAULT_CONFIG: Dict[str, Any] = {
    "provider": {
        "type": "${CLOUDTAG_PROVIDER:gcp}",
        "gcp": {
            "project_id": "${GCP_PROJECT_ID:}",
            "region": "${GCP_REGION:}",
            "zone": "${GCP_ZONE:}",
            "credentials_file": "${GOOGLE_APPLICATION_CREDENTIALS:}",
        },
        "aws": {
            "region": "${AWS_REGION:us-east-1}",
            "profile": "${AWS_PROFILE:}",
            "endpoint_url": "${AWS_ENDPOINT_URL:}",
        },
    },
    "waiter": {
        "poll_interval": 2.0,
        "max_attempts": 10,
    },
    "logging": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file_path": "${CLOUDTAG_LOGDIR:logs}/cloudtag.log",
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated recursively with ``override``."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
