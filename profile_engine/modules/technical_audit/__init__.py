"""Technical SEO audit module."""

from profile_engine.modules.technical_audit.auditor import TechnicalSEOAuditor

__all__ = ["TechnicalSEOAuditor"]
