# convreverb/errors.py

class ConvReverbError(Exception):
    """Base class for every fatal condition the reverb pipeline can hit."""


class MalformedContainerError(ConvReverbError):
    """The file is not a usable RIFF/WAVE container (e.g. no 'data' chunk)."""


class EmptySequenceError(ConvReverbError):
    """A signal with zero samples reached a stage that needs at least one."""


class UnsupportedFormatError(ConvReverbError):
    """Valid container, but not 16-bit mono integer PCM."""
