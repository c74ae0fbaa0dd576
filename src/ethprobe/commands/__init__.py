"""
Commands - CLI entry points for the ethprobe routines.

- block:    Query a block by number
- transfer: Sign and broadcast a native-currency transfer
- counter:  Increment the Counter contract and read it back
- tour:     Run all three routines in sequence
"""
