"""
Models package for transient pipeline values.
"""

from .pipeline_response import PipelineResponse
from .site_content import SiteContent

__all__ = ["PipelineResponse", "SiteContent"]
