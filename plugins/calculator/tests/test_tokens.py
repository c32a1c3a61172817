from plugins.calculator.core import Token, TokenKind, TokenList, VariableStore


def _tokens(*texts: str) -> TokenList:
    return TokenList(Token(text, TokenKind.NAME) for text in texts)


def test_empty_list_has_no_ends():
    tokens = TokenList()
    assert tokens.first is None
    assert tokens.last is None
    assert tokens.pop() is None
    assert len(tokens) == 0
    assert not tokens


def test_append_and_pop_use_the_tail():
    tokens = _tokens("a", "b")
    tokens.append(Token("c", TokenKind.NAME))
    assert tokens.first.text == "a"
    assert tokens.last.text == "c"
    assert tokens.pop().text == "c"
    assert tokens.texts() == ["a", "b"]


def test_empty_lexemes_are_not_appended():
    tokens = TokenList()
    tokens.append(Token("", TokenKind.UNKNOWN))
    assert len(tokens) == 0


def test_move_last_to_transfers_ownership():
    source = _tokens("(", "+", "*")
    target = _tokens("1")
    moved = source.move_last_to(target)
    assert moved.text == "*"
    assert source.texts() == ["(", "+"]
    assert target.texts() == ["1", "*"]
    assert target.last is moved


def test_move_from_empty_list_is_a_no_op():
    target = _tokens("1")
    assert TokenList().move_last_to(target) is None
    assert target.texts() == ["1"]


def test_number_tokens_carry_their_value():
    token = Token.number(14)
    assert token.kind is TokenKind.NUMBER
    assert token.value == 14.0
    assert token.text == "14.000000000000000"
    assert token.is_operand


def test_variable_store_redefinition_updates_in_place():
    store = VariableStore()
    store.define("x", 5)
    store.define("x", 9)
    assert store.lookup("x") == 9.0
    assert len(store) == 1
    assert "x" in store


def test_variable_store_lookup_of_undefined_name_is_zero():
    store = VariableStore()
    assert store.lookup("missing") == 0.0
    assert "missing" not in store


def test_variable_store_clear_releases_everything():
    store = VariableStore()
    store.define("a", 1)
    store.define("b", 2)
    store.clear()
    assert len(store) == 0
    assert store.as_dict() == {}
