"""Status lines reported for converted files."""

from typing import Optional

from imgconv.core.constants import DEFAULT_LANGUAGE

STATUS_TEMPLATES = {
    "ja": "{original_path}の画像形式を{target_format}({new_path})に変更しました。",
    "en": "Changed image format of {original_path} to {target_format} ({new_path}).",
}


def conversion_status(
    original_path, target_format: str, new_path, language: Optional[str] = None
) -> str:
    """Format the status line for one converted file."""
    template = STATUS_TEMPLATES.get(language or DEFAULT_LANGUAGE)
    if template is None:
        template = STATUS_TEMPLATES[DEFAULT_LANGUAGE]
    return template.format(
        original_path=original_path, target_format=target_format, new_path=new_path
    )
