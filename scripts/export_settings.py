"""Export the service's environment variables as JSON for the docs."""

import json
import sys
from pathlib import Path
from typing import Type

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    GithubAppSettings,
    Settings,
    WebhookSettings,
)

SETTINGS_CLASSES: list[Type[BaseSettings]] = [
    Settings,
    WebhookSettings,
    GithubAppSettings,
]


def _display_type(annotation) -> str:
    type_name = getattr(annotation, "__name__", str(annotation))
    if "Secret" in type_name:
        return "Secret"
    return type_name.replace("typing.", "")


def get_model_metadata(settings_class: Type[BaseSettings]) -> dict:
    prefix = settings_class.model_config.get("env_prefix", "")
    properties = []

    for name, field in settings_class.model_fields.items():
        default = field.get_default()

        # Empty secrets have no usable default; deployments must set them.
        is_required = default is PydanticUndefined or (
            isinstance(default, SecretStr) and default.get_secret_value() == ""
        )

        if is_required or default is None:
            display_default = None
        elif isinstance(default, bool):
            display_default = default
        else:
            display_default = str(default)

        properties.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": _display_type(field.annotation),
                "default": display_default,
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": (settings_class.__doc__ or "").strip().splitlines()[0],
        "properties": properties,
    }


def export_settings(output_path: Path = root_path / "docs" / "env-vars.json") -> Path:
    data = {cls.__name__: get_model_metadata(cls) for cls in SETTINGS_CLASSES}

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    return output_path


if __name__ == "__main__":
    print(f"Exported settings to {export_settings()}")
