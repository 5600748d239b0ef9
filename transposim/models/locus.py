"""
Locus records describing single DNA segments of a bacterial genome.

A locus only tracks abstract attributes (type, length and fitness effects);
no sequence content is modelled. Transposon loci may copy themselves into other
loci, which fragments the target into an upstream and a downstream piece.
"""

import string
from dataclasses import dataclass, replace, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .errors import ValidationError
from transposim.utils.validation import is_finite_real, is_positive_int, is_real


# Loci at or below this length are never fragmented by an insertion
MIN_SPLIT_LENGTH = 5

DEFAULT_LOCUS_LENGTH = 900
DEFAULT_INTERGENIC_LENGTH = 100
LABEL_LENGTH = 10

_LABEL_ALPHABET = np.array(list(string.ascii_letters + string.digits))


class LocusType(Enum):
    """Kinds of DNA segment tracked in a genome."""
    GENE = "Gene"
    INTERGENIC = "Intergenic"
    TRANSPOSON = "Transposon"
    PSEUDOGENE = "Pseudogene"


def random_label(rng: Optional[np.random.Generator] = None, length: int = LABEL_LENGTH) -> str:
    """Draw a random alphanumeric label."""
    rng = rng if rng is not None else np.random.default_rng()
    return "".join(rng.choice(_LABEL_ALPHABET, size=length))


@dataclass
class Locus:
    """
    One contiguous DNA segment.

    Attributes:
        type: Kind of segment
        label: Identifier, not required to be unique within a genome. When
            omitted on direct construction it is drawn from an unseeded
            generator; use ``Locus.create(rng=...)`` for reproducible labels
        index: Fragment provenance counter, incremented on downstream fragments
        length: Segment length
        fitness: Contribution to host fitness while the locus is intact
        disruption_cost: Penalty charged once the locus has become a pseudogene
        transposition_rate: Per-generation jump probability (transposons only)
    """

    type: LocusType = LocusType.GENE
    label: Optional[str] = None
    index: int = 1
    length: Optional[int] = None
    fitness: float = 0.0
    disruption_cost: float = 0.0
    transposition_rate: float = 0.0

    def __post_init__(self):
        """Resolve defaults and validate fields."""
        self.type = self._coerce_type(self.type)

        if self.label is None:
            self.label = random_label()
        if not isinstance(self.label, str):
            raise ValidationError(f"Locus label must be a string, got {self.label!r}")

        if not is_positive_int(self.index):
            raise ValidationError(f"Locus index must be a positive integer, got {self.index!r}")
        self.index = int(self.index)

        if self.length is None:
            self.length = (
                DEFAULT_INTERGENIC_LENGTH if self.type == LocusType.INTERGENIC
                else DEFAULT_LOCUS_LENGTH
            )
        if not is_positive_int(self.length):
            raise ValidationError(f"Locus length must be a positive integer, got {self.length!r}")
        self.length = int(self.length)

        for name in ("fitness", "disruption_cost", "transposition_rate"):
            value = getattr(self, name)
            if not is_real(value):
                raise ValidationError(f"Locus {name} must be a real number, got {value!r}")
            if not is_finite_real(value):
                raise ValidationError(f"Locus {name} must be finite, got {value!r}")
            setattr(self, name, float(value))

        if self.transposition_rate < 0:
            raise ValidationError("Transposition rate cannot be negative")
        if self.transposition_rate > 0 and self.type != LocusType.TRANSPOSON:
            raise ValidationError(
                f"Only transposon loci can transpose ({self.type.value} locus "
                f"'{self.label}' has rate {self.transposition_rate})"
            )

    @staticmethod
    def _coerce_type(value: Union[LocusType, str]) -> LocusType:
        if isinstance(value, LocusType):
            return value
        try:
            return LocusType(value)
        except ValueError:
            raise ValidationError(
                f"Locus type must be one of {[t.value for t in LocusType]}, got {value!r}"
            ) from None

    @classmethod
    def create(
        cls,
        type: Union[LocusType, str] = LocusType.GENE,
        label: Optional[str] = None,
        index: int = 1,
        length: Optional[int] = None,
        fitness: float = 0.0,
        disruption_cost: float = 0.0,
        transposition_rate: float = 0.0,
        rng: Optional[np.random.Generator] = None
    ) -> 'Locus':
        """
        Construct a locus, drawing the default label from ``rng``.

        Args:
            type: Locus type or its string value
            label: Identifier, a random 10-character token when omitted
            index: Fragment index
            length: Segment length, 900 (or 100 for intergenic) when omitted
            fitness: Intact fitness contribution
            disruption_cost: Pseudogene penalty
            transposition_rate: Jump probability for transposons
            rng: Random generator used for the default label

        Returns:
            New Locus instance

        Raises:
            ValidationError: If any field is invalid
        """
        if label is None:
            label = random_label(rng)
        return cls(
            type=type,
            label=label,
            index=index,
            length=length,
            fitness=fitness,
            disruption_cost=disruption_cost,
            transposition_rate=transposition_rate
        )

    @property
    def is_transposon(self) -> bool:
        return self.type == LocusType.TRANSPOSON

    @property
    def is_pseudogene(self) -> bool:
        return self.type == LocusType.PSEUDOGENE

    @property
    def is_intact(self) -> bool:
        """Gene, transposon and intergenic loci count as intact."""
        return self.type != LocusType.PSEUDOGENE

    def copy(self, **changes: Any) -> 'Locus':
        """Return a validated copy with optional field changes."""
        return replace(self, **changes)

    def maybe_transpose(self, rng: np.random.Generator) -> Optional['Locus']:
        """
        Decide whether this locus transposes in the current generation.

        Only transposons with a positive rate consume a random draw.

        Returns:
            Copy of the locus to be inserted elsewhere, or None
        """
        if self.type != LocusType.TRANSPOSON or self.transposition_rate <= 0:
            return None

        if rng.random() < self.transposition_rate:
            return self.copy()
        return None

    def split(
        self,
        inserted: 'Locus',
        rng: Optional[np.random.Generator] = None,
        insertion_point: Optional[int] = None
    ) -> List['Locus']:
        """
        Fragment this locus around an inserted transposon.

        Loci no longer than 5 are not fragmented; the inserted locus is
        placed after them instead. Otherwise the insertion point is drawn
        uniformly from [2, length - 1] so both fragments keep a positive
        length that sums to the original.

        Args:
            inserted: Locus inserted into this one
            rng: Random generator for the insertion point
            insertion_point: Fixed insertion point, drawn when omitted

        Returns:
            ``[self, inserted]`` or ``[upstream, inserted, downstream]``
        """
        if self.length <= MIN_SPLIT_LENGTH:
            return [self, inserted]

        if insertion_point is None:
            if rng is None:
                raise ValueError("A random generator is required to draw an insertion point")
            insertion_point = int(rng.integers(2, self.length))
        elif not 2 <= insertion_point <= self.length - 1:
            raise ValidationError(
                f"Insertion point {insertion_point} outside [2, {self.length - 1}]"
            )

        fragment_type = (
            LocusType.INTERGENIC if self.type == LocusType.INTERGENIC
            else LocusType.PSEUDOGENE
        )
        upstream = self.copy(
            type=fragment_type,
            length=insertion_point,
            transposition_rate=0.0
        )
        downstream = self.copy(
            type=fragment_type,
            length=self.length - insertion_point,
            transposition_rate=0.0,
            index=self.index + 1
        )
        return [upstream, inserted, downstream]

    def to_dict(self) -> Dict[str, Any]:
        """Field dump used by reporting collaborators."""
        data = asdict(self)
        data["type"] = self.type.value
        return {
            key: data[key]
            for key in ("label", "index", "type", "length", "fitness",
                        "disruption_cost", "transposition_rate")
        }

    def __str__(self) -> str:
        return (f"Locus {self.label} [{self.index}]: {self.type.value}, "
                f"length={self.length}, fitness={self.fitness:.3f}, "
                f"disruption_cost={self.disruption_cost:.3f}, "
                f"transposition_rate={self.transposition_rate:.3f}")
