"""Pydantic models for MediaSilo API entities."""

from pathlib import Path

from pydantic import BaseModel, Field


class UploadTicket(BaseModel):
    """Short-lived credentials for writing one file to the S3 ingest bucket.

    Example payload::

        {
            "assetUrl": "https://s3.amazonaws.com/ingest-east.mediasilo.com/<uuid>/MYFILE.mov",
            "amzDate": "Wed, 10 Jun 2015 18:01:46 GMT",
            "amzAcl": "private",
            "contentType": "application/octet-stream",
            "authorization": "AWS <key>:<signature>",
            "httpMethod": "PUT"
        }
    """

    asset_url: str = Field(alias="assetUrl")
    amz_date: str = Field(alias="amzDate")
    amz_acl: str = Field(alias="amzAcl")
    content_type: str = Field(alias="contentType")
    authorization: str
    http_method: str = Field(alias="httpMethod")

    model_config = {"populate_by_name": True, "frozen": True}

    def storage_headers(self, content_length: int) -> dict[str, str]:
        """Headers the storage endpoint expects for this ticket."""
        return {
            "x-amz-date": self.amz_date,
            "Authorization": self.authorization,
            "x-amz-acl": self.amz_acl,
            "Content-Type": self.content_type,
            "Content-Length": str(content_length),
        }


class UploadContext(BaseModel):
    """A ticket paired with the local file it authorizes transferring."""

    file_path: Path
    upload_ticket: UploadTicket

    model_config = {"frozen": True}


class Asset(BaseModel):
    """Asset record returned by MediaSilo after registration.

    The shape is not consulted beyond ``id``; every other key is kept as-is.
    """

    id: str | int | None = None

    model_config = {"extra": "allow", "frozen": True}


class UploadResult(BaseModel):
    """Outcome of a completed upload run."""

    context: UploadContext
    asset: Asset

    model_config = {"frozen": True}
