# errors.py
"""
Errori strutturali del calcolo dell'envelope.

Tutti derivano da ValueError: sono violazioni di contratto e vanno
propagati al chiamante, mai corretti in silenzio.
"""


class EnvelopeError(ValueError):
    """Base class per gli errori dell'envelope."""
    pass


class EmptyInput(EnvelopeError):
    """
    Input without curves.

    The builders never raise it (empty input gives an empty diagram); it is
    raised only when the configuration disallows empty input.
    """
    pass


class MalformedMonotoneInput(EnvelopeError):
    """
    Two curve sets overlap on an interval without one dominating the other
    and without coinciding: one of the curves was not really x-monotone or
    the curve predicates contradict themselves.
    """

    def __init__(self, interval, curves1, curves2, reason: str = ''):
        self.interval = interval
        self.curves1 = list(curves1)
        self.curves2 = list(curves2)
        self.reason = reason
        lo, hi = interval
        lo_s = '-inf' if lo is None else str(lo)
        hi_s = '+inf' if hi is None else str(hi)
        message = (
            f"Curve non x-monotone o predicati incoerenti su ({lo_s}, {hi_s}): "
            f"{self.curves1!r} vs {self.curves2!r}"
        )
        if reason:
            message += f" [{reason}]"
        super().__init__(message)


class UnresolvableTie(EnvelopeError):
    """I traits non hanno saputo decidere una relazione promessa dal contratto."""

    def __init__(self, curve1, curve2, interval, answer=None):
        self.curve1 = curve1
        self.curve2 = curve2
        self.interval = interval
        self.answer = answer
        super().__init__(
            f"Relazione indecidibile tra {curve1!r} e {curve2!r} "
            f"su {interval}: risposta {answer!r}"
        )


class DiagramConsumedError(EnvelopeError):
    """Un diagramma gia' consumato da un merge e' stato riusato."""
    pass


class MismatchedEnvelopeType(EnvelopeError):
    """Merge tra diagrammi di tipo diverso (lower vs upper)."""
    pass
