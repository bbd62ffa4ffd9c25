import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .address import detect_address
from .candidates import Candidate
from .company import detect_company
from .contacts import detect_email, detect_phone, detect_website
from .lines import split_lines
from .names import detect_name
from .positions import detect_position

logger = logging.getLogger(__name__)


# =========================
# DATA MODEL
# =========================

RECORD_FIELDS = ("name", "company", "position", "email", "phone", "address", "website")


@dataclass(frozen=True)
class BusinessCardRecord:
    name: str = ""
    company: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    website: str = ""
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "company": self.company,
            "position": self.position,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "website": self.website,
            "raw_text": self.raw_text,
        }

    def filled_fields(self) -> List[str]:
        return [field for field in RECORD_FIELDS if getattr(self, field)]


# =========================
# PARSER
# =========================

class CardParser:
    """Runs every field detector over one OCR text and assembles the record.

    Parsing never raises: a detector that fails is logged and its field is
    left empty.
    """

    def parse(self, text: str) -> BusinessCardRecord:
        if not isinstance(text, str):
            logger.warning(f"Expected OCR text as str, got {type(text).__name__}")
            text = ""

        lines = split_lines(text)
        logger.debug(f"Parsing {len(lines)} lines")

        email = self._run("email", detect_email, text, lines)
        phone = self._run("phone", detect_phone, lines)
        website = self._run("website", detect_website, lines)
        position = self._run("position", detect_position, lines)
        company = self._run("company", detect_company, lines, email)
        name = self._run("name", detect_name, lines, company, position)
        address = self._run("address", detect_address, lines)

        record = BusinessCardRecord(
            name=name,
            company=company,
            position=position,
            email=email,
            phone=phone,
            address=address,
            website=website,
            raw_text=text,
        )
        logger.debug(f"Extracted fields: {record.filled_fields()}")
        return record

    def parse_batch(self, texts: List[str]) -> List[BusinessCardRecord]:
        return [self.parse(text) for text in texts]

    # =========================
    # HELPERS
    # =========================

    @staticmethod
    def _run(field: str, detector: Callable[..., Optional[Candidate]], *args) -> str:
        try:
            candidate = detector(*args)
        except Exception:
            logger.exception(f"{field} detector failed; leaving the field empty")
            return ""
        return candidate.value if candidate is not None else ""


_default_parser = CardParser()


def extract(raw_text: str) -> BusinessCardRecord:
    """Extract a business card record from raw OCR text."""
    return _default_parser.parse(raw_text)
