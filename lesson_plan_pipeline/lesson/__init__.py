from .models import ExportFormat, FormData, FormValidationError, safe_file_stem
from .prompt import compose_prompt

__all__ = [
    "ExportFormat",
    "FormData",
    "FormValidationError",
    "safe_file_stem",
    "compose_prompt",
]
