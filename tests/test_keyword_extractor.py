from journal_api.services.keyword_extractor import KeywordExtractor


def test_empty_text():
    extractor = KeywordExtractor()
    assert extractor.extract(None) == []
    assert extractor.extract("   ") == []


def test_counts_and_percentages():
    result = KeywordExtractor().extract("仕事 仕事 散歩。仕事、友達")

    assert result[0] == {"word": "仕事", "count": 3, "percentage": 60.0}
    assert {"word": "散歩", "count": 1, "percentage": 20.0} in result
    assert {"word": "友達", "count": 1, "percentage": 20.0} in result


def test_drops_stop_words_numbers_and_short_words():
    result = KeywordExtractor().extract("これ は 2025 猫 です 映画")

    assert [k["word"] for k in result] == ["映画"]


def test_respects_max_keywords():
    text = " ".join(f"単語{chr(0x3042 + i)}" for i in range(20))
    assert len(KeywordExtractor(max_keywords=3).extract(text)) == 3


def test_extract_from_texts_joins_messages():
    result = KeywordExtractor().extract_from_texts(["旅行 楽しい", None, "旅行"])

    assert result[0]["word"] == "旅行"
    assert result[0]["count"] == 2
