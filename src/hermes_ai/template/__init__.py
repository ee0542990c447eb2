from hermes_ai.template.base import TemplateGenerator
from hermes_ai.template.claude import ClaudeTemplateGenerator
from hermes_ai.template.shortest import ShortestTextTemplateGenerator

__all__ = ["ClaudeTemplateGenerator", "ShortestTextTemplateGenerator", "TemplateGenerator"]
