"""Alert headers telling the frontend what a write did."""

from blogstack.configs.settings import settings


def _header(kind: str) -> str:
    return f"X-{settings.CLIENT_APP_NAME}-{kind}"


def create_alert(message: str, param: str) -> dict[str, str]:
    return {_header("alert"): message, _header("params"): param}


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.CLIENT_APP_NAME}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.CLIENT_APP_NAME}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.CLIENT_APP_NAME}.{entity_name}.deleted", param)


def create_failure_alert(entity_name: str, error_key: str) -> dict[str, str]:
    return {_header("error"): f"error.{error_key}", _header("params"): entity_name}
