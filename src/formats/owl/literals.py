"""Rendering of RDF terms into content field values."""

import logging
import re
from datetime import date, datetime
from typing import Optional

from rdflib import XSD, Literal
from rdflib.term import Node

from constants import ContentDefaults

logger = logging.getLogger(__name__)

_ISO_DATE_PREFIX = re.compile(r"^\s*(-?\d{4,}-\d{2}-\d{2})")

DATE_DATATYPES = frozenset({XSD.date, XSD.dateTime, XSD.dateTimeStamp})


def term_text(term: Optional[Node]) -> Optional[str]:
    """Return the lexical form of an RDF term, or None if it is missing or empty."""
    if term is None:
        return None
    return str(term) or None


def format_date_literal(literal: Literal) -> str:
    """Render an xsd:date/xsd:dateTime literal as YYYY-MM-DD."""
    value = literal.toPython()
    if isinstance(value, (datetime, date)):
        return value.strftime(ContentDefaults.DATE_FORMAT)

    # rdflib leaves ill-typed lexical forms as Literal; keep the calendar date part
    match = _ISO_DATE_PREFIX.match(str(literal))
    if match:
        return match.group(1)

    logger.warning(f"Could not interpret '{literal}' as {literal.datatype}; keeping lexical form")
    return str(literal)


def literal_to_string(literal: Optional[Node]) -> Optional[str]:
    """Render a literal as a field value string."""
    if literal is None:
        return None
    if isinstance(literal, Literal) and literal.datatype in DATE_DATATYPES:
        return format_date_literal(literal)
    return term_text(literal)
