"""adpreview - self-contained previews of packaged HTML creatives."""

__version__ = "0.1.0"
