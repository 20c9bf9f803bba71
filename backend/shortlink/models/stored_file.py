# shortlink/models/stored_file.py
from tortoise import fields, models


def original_filename(file_id: str) -> str:
    """Strip the collision-breaking ":<suffix>" from a file id."""
    name, sep, _ = file_id.rpartition(":")
    return name if sep else file_id


class StoredFile(models.Model):
    """
    Uploaded file payload.

    - id: "<original filename>:<random suffix>"
    - mime: ordered list of [header, value] pairs from the upload, replayed
      verbatim when the file is served
    Never mutated after creation.
    """
    id = fields.CharField(max_length=512, pk=True)
    data = fields.BinaryField()
    mime = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "files"

    @property
    def filename(self) -> str:
        return original_filename(self.id)
