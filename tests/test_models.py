from fabsearch.models.card import CardDetail, VariantRef, language_from_print_id
from fabsearch.models.failure import (
    ExtractionError,
    FailureKind,
    KnownError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)


class TestLanguageFromPrintId:
    def test_prefixed_print(self) -> None:
        assert language_from_print_id("JA_WTR001") == "JA"

    def test_unprefixed_print_is_english(self) -> None:
        assert language_from_print_id("WTR001") == "EN"

    def test_lowercase_prefix_is_not_a_language(self) -> None:
        assert language_from_print_id("ja_WTR001") == "EN"

    def test_prefix_needs_underscore(self) -> None:
        assert language_from_print_id("JAWTR001") == "EN"

    def test_empty_print_id(self) -> None:
        assert language_from_print_id("") == "EN"


class TestCardDetail:
    def test_to_dict_drops_none_but_keeps_empty_strings(self) -> None:
        detail = CardDetail(card_id="x", print_id="", language="EN", image_url="")

        data = detail.to_dict()

        assert data == {
            "cardId": "x",
            "printId": "",
            "language": "EN",
            "imageUrl": "",
            "enName": "",
            "variants": [],
        }

    def test_variants_serialize_nested(self) -> None:
        detail = CardDetail(
            card_id="x",
            print_id="WTR001",
            language="EN",
            image_url="",
            variants=[
                VariantRef(print_id="WTR001", language="EN", set_name="", finish="", url="u")
            ],
        )

        assert detail.to_dict()["variants"] == [
            {"printId": "WTR001", "language": "EN", "setName": "", "finish": "", "url": "u"}
        ]


class TestFailures:
    def test_all_errors_are_known_errors(self) -> None:
        errors = [
            UpstreamError("down"),
            ExtractionError("bad"),
            NotFoundError("missing"),
            ValidationError("cardId"),
        ]

        for error in errors:
            assert isinstance(error, KnownError)

    def test_kinds(self) -> None:
        assert UpstreamError("down").kind == FailureKind.EXTERNAL_API_ERROR
        assert ExtractionError("bad").kind == FailureKind.PARSE_FAILED
        assert NotFoundError("missing").kind == FailureKind.NOT_FOUND
        assert ValidationError("cardId").kind == FailureKind.MISSING_REQUIRED

    def test_validation_message_names_field(self) -> None:
        assert "cardId" in ValidationError("cardId").message

    def test_upstream_error_keeps_status(self) -> None:
        assert UpstreamError("down", status_code=503).status_code == 503
