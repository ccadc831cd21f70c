from __future__ import annotations
from typing import Optional
import re
from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"[ \t]+")


def strip_html(text: Optional[str]) -> Optional[str]:
    """Reduce user supplied markup to plain text, keeping line breaks."""
    if text is None:
        return None
    if "<" not in text and "&" not in text:
        return text.strip()

    soup = BeautifulSoup(text, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")

    plain = soup.get_text()
    lines = [_WHITESPACE.sub(" ", line).strip() for line in plain.splitlines()]
    return "\n".join(line for line in lines if line)


def mask_email(email: Optional[str]) -> str:
    if not email:
        return "none"
    return f"{email[:3]}***@***"


def mask_phone(phone: Optional[str]) -> str:
    return "***-***-****" if phone else "none"
