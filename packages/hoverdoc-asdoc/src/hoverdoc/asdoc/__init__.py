from .comment import StructuredComment, PARAM_TAG, RETURN_TAGS
from .markup import render, render_inline

__all__ = ["StructuredComment", "PARAM_TAG", "RETURN_TAGS", "render", "render_inline"]
