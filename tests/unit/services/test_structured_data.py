from fra_atlas.services.extraction_service import build_messages, completion_text, parse_structured_data


def test_json_block_after_raw_text():
    text = 'Name: Asha Devi\nVillage: Khairwani\n\n```json\n{"claimantName": "Asha Devi", "village": "Khairwani"}\n```'
    assert parse_structured_data(text) == {"claimantName": "Asha Devi", "village": "Khairwani"}


def test_nested_objects_are_kept_whole():
    text = 'x {"coordinates": {"lat": 22.5, "lng": 80.3}, "area": "2 ha"} y'
    assert parse_structured_data(text) == {"coordinates": {"lat": 22.5, "lng": 80.3}, "area": "2 ha"}


def test_no_json_is_none():
    assert parse_structured_data("plain OCR text only") is None


def test_broken_json_is_none():
    assert parse_structured_data("{claimantName: Asha") is None
    assert parse_structured_data("{not json}") is None


def test_messages_carry_image_part():
    messages = build_messages("https://cdn.test/scan.png")

    assert messages[0]["role"] == "system"
    assert "OCR expert" in messages[0]["content"]
    parts = messages[1]["content"]
    assert parts[0]["type"] == "text"
    assert parts[1] == {"type": "image_url", "image_url": {"url": "https://cdn.test/scan.png"}}


def test_completion_text():
    assert completion_text({"choices": [{"message": {"content": "hello"}}]}) == "hello"
    assert completion_text({"choices": []}) == ""
    assert completion_text({}) == ""
