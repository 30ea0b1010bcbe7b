# convreverb/cr_io/tagscan.py
"""
Byte-granular search for a 4-byte chunk tag.

TagScanner is a tiny string-search automaton. Its state is the number of tag
bytes matched so far (0..len(tag)); reaching len(tag) is terminal. On a
mismatch it falls back to the longest tag prefix that is still a suffix of
what was seen and re-tests the current byte from there, so partial matches
like b"ddata" or b"dadata" resynchronize instead of being skipped.

It knows nothing about streams: feed it bytes, ask if it is done.
"""

DATA_TAG = b"data"


def _fallback_table(tag):
    # classic prefix function: fail[i] = length of the longest proper
    # prefix of tag[:i+1] that is also a suffix of it
    fail = [0] * len(tag)
    k = 0
    for i in range(1, len(tag)):
        while k > 0 and tag[i] != tag[k]:
            k = fail[k - 1]
        if tag[i] == tag[k]:
            k += 1
        fail[i] = k
    return fail


class TagScanner:
    def __init__(self, tag=DATA_TAG):
        if not tag:
            raise ValueError("tag must not be empty")
        self.tag = bytes(tag)
        self._fail = _fallback_table(self.tag)
        self.state = 0
        self.consumed = 0

    @property
    def matched(self):
        return self.state == len(self.tag)

    def feed(self, byte):
        """Advance by one byte (an int 0..255). Returns True once the tag is complete."""
        if self.matched:
            return True
        self.consumed += 1
        while self.state > 0 and byte != self.tag[self.state]:
            self.state = self._fail[self.state - 1]
        if byte == self.tag[self.state]:
            self.state += 1
        return self.matched
