from .dependencies.body import ParsedBody, parsed_body

__all__ = ["ParsedBody", "parsed_body"]
