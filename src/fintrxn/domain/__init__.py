"""Domain layer for fintrxn application."""

from fintrxn.domain.entities import Case, Operation, PostingTemplate

__all__ = ["Case", "Operation", "PostingTemplate"]
