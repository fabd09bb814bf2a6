"""Prompts for the RAG chat assistant."""

from __future__ import annotations

from typing import Sequence

from .postprocess import BADGE_TAG, INFO_SENTENCE

NO_INFORMATION_ANSWER = "Üzgünüm, bu konuda bilgi bankamda yeterli bilgi yok. Lütfen başka bir soru sorun."

SYSTEM_PROMPT = f"""Sen Türkiye'deki yatırım teşvikleri konusunda uzman bir asistansın.
Resmi Soru-Cevap dokümanlarına dayanarak kullanıcı sorularını cevaplıyorsun.

KURALLAR:
1. Yalnızca sağlanan bilgi bankasındaki bilgilere dayanarak cevap ver.
2. Bilgi bankasında alakalı bilgi yoksa yalnızca şunu yaz: "{NO_INFORMATION_ANSWER}"
3. Bilgi uydurma, genel bilgiyle cevap verme.
4. Cevapları Türkçe, net ve profesyonel bir dille ver.
5. Yanıt "<İl> Yerel Kalkınma Hamlesi Yatırım Konuları" ile başlıyorsa sonuna şu cümleyi ekle:
   "{INFO_SENTENCE}"
   ve ardından şu işareti aynen yaz: {BADGE_TAG}
"""


def build_user_prompt(context: str, question: str, matched_questions: Sequence[str]) -> str:
    similar = ""
    if matched_questions:
        listed = "\n".join(f"{i}. {q}" for i, q in enumerate(matched_questions, start=1))
        similar = f"\n\nBenzer Sorular:\n{listed}"
    return (
        f"Bilgi Bankası (Resmi Soru-Cevap Dokümanı):\n{context}{similar}\n\n"
        f"Kullanıcı Sorusu: {question}\n\n"
        "Lütfen yukarıdaki bilgi bankasına dayanarak soruyu cevapla."
    )
