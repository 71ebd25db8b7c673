import sys

from chord_sheets import apply_edits, chord_symbol_ranges, tokenize_document, transpose
from chord_sheets.sheet_parser import chord_tokens, section_names

text = """[Verse]
Gm     C
Hello  world
"""
lines = tokenize_document(text)

# Access sections
sys.stdout.write(section_names(lines)[0] + "\n")  # "Verse"

# Access chords with their document offsets
for token in chord_tokens(lines):
    sys.stdout.write(f"{token.text} ({token.chord.quality}) at {token.start}\n")

# Transpose up a semitone
sys.stdout.write(apply_edits(text, transpose(chord_symbol_ranges(lines), "up")))
