from tesvik_portal.rag.postprocess import (
    BADGE_TAG,
    INFO_SENTENCE,
    append_info_and_badge,
    apply_badge,
    extract_follow_up_question,
    should_append_badge,
)


class TestBadge:
    def test_trigger(self):
        assert should_append_badge("Konya Yerel Kalkınma Hamlesi Yatırım Konuları şunlardır: ...")
        assert should_append_badge("Soru: Şanlıurfa Yerel Kalkınma Hamlesi Yatırım Konuları nelerdir?")
        assert not should_append_badge("Yatırım teşvik belgesi nedir?")
        assert not should_append_badge(None)

    def test_appends_info_and_badge_once(self):
        answer = "Konya Yerel Kalkınma Hamlesi Yatırım Konuları: un ve makarna üretimi."
        once = apply_badge(answer)
        assert once == f"{answer} {INFO_SENTENCE}\n{BADGE_TAG}"
        assert append_info_and_badge(once) == once

    def test_newline_separator_without_period(self):
        out = append_info_and_badge("Konya Yerel Kalkınma Hamlesi Yatırım Konuları")
        assert out.splitlines()[1] == INFO_SENTENCE

    def test_other_answers_untouched(self):
        assert apply_badge("KDV istisnası uygulanır.") == "KDV istisnası uygulanır."


class TestFollowUpQuestion:
    def test_planning_question(self):
        body, question = extract_follow_up_question(
            "Bölgesel destekler ile yararlanabilirsiniz.\n\nHangi ilde yatırım yapmayı planlıyorsunuz"
        )
        assert body == "Bölgesel destekler ile yararlanabilirsiniz."
        assert question == "Hangi ilde yatırım yapmayı planlıyorsunuz?"

    def test_osb_question(self):
        body, question = extract_follow_up_question("Destek mevcuttur.\n\nYatırım bir OSB içinde mi olacak?")
        assert body == "Destek mevcuttur."
        assert question == "Yatırım bir OSB içinde mi olacak?"

    def test_no_question(self):
        content = "KDV istisnası uygulanır.\n\nGümrük vergisi muafiyeti de vardır."
        assert extract_follow_up_question(content) == (content, None)
