from .attachment import Attachment, ImageAttachment, LinkAttachment
from .activity import Activity
