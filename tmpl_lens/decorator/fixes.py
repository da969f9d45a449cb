"""Registry of supported code fix identifiers."""

import logging
from typing import Iterable, Tuple, Union

logger = logging.getLogger(__name__)


class SupportedFixRegistry:
    """Fix codes the composite service reports as supported.

    Built once from the host's codes and the template service's codes and
    never changed afterwards. Reads always return the same tuple.
    """

    def __init__(self, codes: Iterable[Union[str, int]] = ()):
        self._codes: Tuple[str, ...] = tuple(dict.fromkeys(str(code) for code in codes))

    @classmethod
    def build(
        cls,
        host_codes: Iterable[Union[str, int]],
        template_codes: Iterable[Union[str, int]] = (),
    ) -> "SupportedFixRegistry":
        host_codes = list(host_codes)
        template_codes = list(template_codes)
        registry = cls([*host_codes, *template_codes])
        logger.debug(
            "Built fix registry: %d host code(s), %d template code(s)",
            len(host_codes), len(template_codes)
        )
        return registry

    def codes(self) -> Tuple[str, ...]:
        return self._codes

    def __contains__(self, code: object) -> bool:
        return str(code) in self._codes

    def __len__(self) -> int:
        return len(self._codes)
