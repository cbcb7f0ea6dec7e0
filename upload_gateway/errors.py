"""Exception hierarchy for the upload gateway. Each error carries the HTTP status it maps to."""


class UploadGatewayError(Exception):
    """Base error. `message` is returned to the client as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFileError(UploadGatewayError):
    """The upload request carried no file part."""

    status_code = 400


class ValidationError(UploadGatewayError):
    """A form field has a value the gateway refuses to store."""

    status_code = 400


class StorageError(UploadGatewayError):
    """The object store failed."""

    status_code = 500


class StorageWriteError(StorageError):
    pass


class StorageReadError(StorageError):
    pass


class PerObjectMetadataError(StorageError):
    """Metadata for a single object could not be read. Listing skips the object."""

    def __init__(self, object_name: str, message: str) -> None:
        super().__init__(message)
        self.object_name = object_name
