"""Small tools: calculator, word counter, Bloom filter, dice, log colouring, EBML/Matroska, TFTP, a shell and tiny servers."""

__version__ = "0.1.0"