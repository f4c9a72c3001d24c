"""
Section-Text Parser

Pulls labeled fields ("Caused by", "Symptoms", "Management", ...) out of the
free text of a pest detail page. The label table doubles as the delimiter
grammar: each value runs from its label to the next recognized label or the
end of the text, whichever comes first.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Sequence, Tuple


def _phrase_pattern(phrase: str) -> str:
    return r'\s+'.join(re.escape(word) for word in phrase.split())


@dataclass(frozen=True)
class SectionLabel:
    """One labeled field of the detail text"""
    key: str
    phrases: Tuple[str, ...]
    single_line: bool = False

    def heading_patterns(self) -> List[Pattern]:
        """Colon-form patterns ("Control:"), synonyms after the primary phrase"""
        return [
            re.compile(rf'\b{_phrase_pattern(phrase)}\s*:[:\s]*', re.IGNORECASE)
            for phrase in self.phrases
        ]

    def loose_patterns(self) -> List[Pattern]:
        """Any-separator patterns ("Control "), tried only when no heading exists"""
        return [
            re.compile(rf'\b{_phrase_pattern(phrase)}[:\s]+', re.IGNORECASE)
            for phrase in self.phrases
        ]

    def terminator_pattern(self) -> Pattern:
        """Pattern marking the start of this label inside another field's value"""
        alternatives = '|'.join(_phrase_pattern(phrase) for phrase in self.phrases)
        return re.compile(rf'\b(?:{alternatives})\s*:', re.IGNORECASE)


SECTION_LABELS: Tuple[SectionLabel, ...] = (
    SectionLabel('causedBy', ('Caused by', 'Causal organism'), single_line=True),
    SectionLabel('problemCategory', ('Problem Category',), single_line=True),
    SectionLabel('symptoms', ('Symptoms',)),
    SectionLabel('comments', ('Comments',)),
    SectionLabel('management', ('Management',)),
    SectionLabel('control', ('Control',)),
    SectionLabel('sku', ('SKU',), single_line=True),
)

# Headings that end a section without being captured themselves
EXTRA_TERMINATORS: Tuple[Pattern, ...] = (
    re.compile(r'\bCategory\s*:', re.IGNORECASE),
    re.compile(r'\bAdditional\s+information\b', re.IGNORECASE),
    re.compile(r'\bReviews\b', re.IGNORECASE),
)

DEFAULT_MAX_LENGTH = 1000


class SectionParser:
    """Generic bounded-capture parser driven by a label table"""

    def __init__(self, labels: Sequence[SectionLabel] = SECTION_LABELS,
                 extra_terminators: Sequence[Pattern] = EXTRA_TERMINATORS,
                 max_length: int = DEFAULT_MAX_LENGTH):
        self.labels = tuple(labels)
        self.max_length = max_length
        self._terminators: Dict[str, List[Pattern]] = {
            label.key: [other.terminator_pattern() for other in self.labels if other.key != label.key]
            + list(extra_terminators)
            for label in self.labels
        }

    def parse(self, text: str) -> Dict[str, str]:
        """
        Parse every label of the table

        Colon headings are located first. A label written without a colon
        is only accepted outside the spans already claimed by other labels,
        so no piece of text lands in two fields.

        Args:
            text: Free text of the detail page

        Returns:
            Mapping of label key to value ('' when the label is absent)
        """
        if not text:
            return {label.key: '' for label in self.labels}

        starts: Dict[str, int] = {}
        claimed: List[Tuple[int, int]] = []

        for label in self.labels:
            match = self._first_match(text, label.heading_patterns())
            if match:
                starts[label.key] = match.end()
                claimed.append((match.start(), self._value_end(text, match.end(), label)))

        for label in self.labels:
            if label.key in starts:
                continue
            match = self._first_match(text, label.loose_patterns(), claimed)
            if match:
                starts[label.key] = match.end()
                claimed.append((match.start(), self._value_end(text, match.end(), label)))

        return {label.key: self._capture(text, starts.get(label.key), label) for label in self.labels}

    @staticmethod
    def _first_match(text: str, patterns: Sequence[Pattern],
                     claimed: Sequence[Tuple[int, int]] = ()) -> Optional[re.Match]:
        for pattern in patterns:
            for match in pattern.finditer(text):
                if not any(start <= match.start() < end for start, end in claimed):
                    return match
        return None

    def _capture(self, text: str, start: Optional[int], label: SectionLabel) -> str:
        if start is None:
            return ''

        return self._clean(text[start:self._value_end(text, start, label)])

    def _value_end(self, text: str, start: int, label: SectionLabel) -> int:
        end = self._find_end(text, start, label)
        if label.single_line:
            newline = text.find('\n', start, end)
            if newline != -1:
                return newline
        return end

    def _find_end(self, text: str, start: int, label: SectionLabel) -> int:
        end = len(text)
        for pattern in self._terminators.get(label.key, []):
            match = pattern.search(text, start, end)
            if match:
                end = match.start()
        return end

    def _clean(self, value: str) -> str:
        lines = [' '.join(line.split()) for line in value.strip().splitlines()]
        cleaned = '\n'.join(line for line in lines if line)
        return cleaned[:self.max_length]


def parse_sections(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> Dict[str, str]:
    """Parse the standard pest-detail labels out of free text"""
    return SectionParser(max_length=max_length).parse(text)
