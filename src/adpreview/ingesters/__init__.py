"""Archive handlers (ingesters) for adpreview."""

from adpreview.ingesters.zip_ingester import ZipIngester

__all__ = ["ZipIngester"]
