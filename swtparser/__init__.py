"""
# swtparser: SwissChess tournament files for humans.

The binary files written by SwissChess have a fixed layout but no
self-describing structure: the meaning of each byte is described by
external structure files (see swtparser.schema), one for each part of
the file, so that the code only knows how to walk the file.

The decoding happens in the following steps

 1. the general data at the start of the file is interpreted using its
    structure file: this gives the number of participants, teams and rounds
    and the version of the program that wrote the file.

 2. from these values the offsets of the blocks of repeated records
    are calculated (see swtparser.layout).

 3. each record is interpreted with the structure file for its kind and
    the fixtures are linked to the index cards of the opponents
    (see swtparser.tournament).

Each interpreted field records also the position in the file where it has
been read from: this is useful to mark up the binary data when the
structure files are written.
"""
