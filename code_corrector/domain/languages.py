from typing import List, Optional

from code_corrector.domain.models import Language

SUPPORTED_LANGUAGES: List[Language] = [
    Language(value="javascript", label="JavaScript", extension="js"),
    Language(value="typescript", label="TypeScript", extension="ts"),
    Language(value="python", label="Python", extension="py"),
    Language(value="java", label="Java", extension="java"),
    Language(value="cpp", label="C++", extension="cpp"),
    Language(value="react", label="React/JSX", extension="jsx"),
    Language(value="html", label="HTML", extension="html"),
    Language(value="css", label="CSS", extension="css"),
]

_BY_VALUE = {lang.value: lang for lang in SUPPORTED_LANGUAGES}


def get_language(identifier: str) -> Optional[Language]:
    return _BY_VALUE.get(identifier)


def is_supported(identifier: str) -> bool:
    return identifier in _BY_VALUE
