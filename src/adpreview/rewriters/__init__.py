"""Document rewriting for self-contained output."""

from adpreview.rewriters.reference_rewriter import ReferenceRewriter, inline_references

__all__ = ["ReferenceRewriter", "inline_references"]
