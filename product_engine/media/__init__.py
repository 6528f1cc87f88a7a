from product_engine.media.attachments import AttachmentList, format_file_size
from product_engine.media.gallery import PhotoGallery

__all__ = ["AttachmentList", "PhotoGallery", "format_file_size"]
