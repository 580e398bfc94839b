"""Pattern matching, PWM scoring and letter/oligonucleotide frequencies for biological sequences."""

__version__ = "0.1.0"

__all__ = [
    "matching",
    "boyermoore",
    "indels",
    "shiftor",
    "pwm",
    "pattern",
    "dictmatch",
    "twobit",
    "oligofreq",
    "letterfreq",
]