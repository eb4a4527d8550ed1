from typing import Literal, Optional

import requests
from pydantic import BaseModel, Field

from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("storefront.ai", prefix="ai")

MISSING_KEY_MESSAGE = "API Key belum dikonfigurasi."
SERVICE_ERROR_MESSAGE = "Gagal menghubungi layanan AI. Silakan coba lagi nanti."
EMPTY_RESPONSE_TEXT = "Maaf, gagal menghasilkan teks saat ini."

LANGUAGE_LABELS = {
    "id": "Indonesia",
    "jw": "Jawa Halus (Krama Inggil)",
    "en": "Inggris",
}


class AIConfigurationError(Exception):
    """The AI credential is not configured."""
    pass


class AIServiceError(Exception):
    """The AI service could not be reached or returned an error."""
    pass


class InvitationRequest(BaseModel):
    groom_name: str = Field(..., min_length=1)
    bride_name: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    venue: str = Field(..., min_length=1)
    tone: Literal["formal", "casual", "islami", "javanese"] = "formal"
    language: Literal["id", "en", "jw"] = "id"


def build_prompt(data: InvitationRequest) -> str:
    return (
        "Bertindaklah sebagai penulis konten kreatif untuk percetakan undangan pernikahan profesional.\n"
        "Buatkan draf teks undangan pernikahan yang indah dan terstruktur dengan detail berikut:\n"
        "\n"
        f"- Mempelai Pria: {data.groom_name}\n"
        f"- Mempelai Wanita: {data.bride_name}\n"
        f"- Tanggal: {data.date}\n"
        f"- Lokasi: {data.venue}\n"
        f"- Gaya Bahasa: {data.tone} (Formal/Santai/Islami/Adat Jawa)\n"
        f"- Bahasa Output: {LANGUAGE_LABELS[data.language]}\n"
        "\n"
        "Format output harus rapi, mengandung pembukaan, isi (detail acara), dan penutup yang sopan.\n"
        "Jangan gunakan markdown bold/italic yang berlebihan, fokus pada kata-kata yang puitis namun jelas.\n"
    )


class InvitationWriter:
    """
    Thin client for the Gemini `generateContent` REST endpoint.
    One request per call, no retries.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_URL).rstrip("/")
        self.timeout = timeout or settings.AI_TIMEOUT_SECONDS

    def generate(self, data: InvitationRequest) -> str:
        if not self.api_key:
            raise AIConfigurationError(MISSING_KEY_MESSAGE)

        url = f"{self.base_url}/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": build_prompt(data)}]}]}
        try:
            r = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            r.raise_for_status()
            body = r.json()
        except (requests.RequestException, ValueError) as e:
            log.warning(f"Gemini request failed: {type(e).__name__}: {e}")
            raise AIServiceError(SERVICE_ERROR_MESSAGE) from e

        return self._extract_text(body) or EMPTY_RESPONSE_TEXT

    @staticmethod
    def _extract_text(body) -> str:
        try:
            parts = body["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return ""
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
