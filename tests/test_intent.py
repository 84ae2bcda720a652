from src.catalog.intent import extract_product_intent


def test_keywords_found_in_keyword_list_order():
    intent = extract_product_intent("Habt ihr Anavar oder Testosteron da?")
    assert intent.has_product_intent is True
    # "test" is contained in "testosteron"
    assert intent.search_terms == ["testosteron", "test", "anavar"]
    assert intent.search_query == "testosteron test anavar"


def test_multi_word_keyword():
    intent = extract_product_intent("Was kostet das Zeug von Akra Labs?")
    assert intent.search_terms == ["akra labs"]


def test_no_intent_for_general_questions():
    intent = extract_product_intent("Wie lange dauert der Versand?")
    assert intent.has_product_intent is False
    assert intent.search_terms == []
    assert intent.search_query == ""


def test_custom_keywords_and_empty_message():
    assert extract_product_intent("Vitamin D3", keywords=["vitamin"]).search_terms == ["vitamin"]
    assert extract_product_intent("", keywords=["vitamin"]).has_product_intent is False
