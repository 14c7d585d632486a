from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, AnyUrl, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """URL形式のみ検証し、入力文字列はそのまま保存する (正規化しない)"""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_parsing", "Input should be a valid URL")
    return value


def _check_email(value: str) -> str:
    """メール形式のみ検証。EmailStrと違いドメインの小文字化などをしない"""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise PydanticCustomError(
            "value_error",
            "value is not a valid email address: {reason}",
            {"reason": str(e)},
        )
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
EmailText = Annotated[str, AfterValidator(_check_email)]
