"""Allow ``python -m mediasilo_upload``."""

from .cli import app

app(prog_name="mediasilo-upload")
