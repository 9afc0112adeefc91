REGISTER_NAMES   = 'abcdefghijklmnopqrstuvwxyz'
NUMBER_OF_REGS   = len(REGISTER_NAMES)

WORD_BITS        = 64
WORD_MASK        = (1 << WORD_BITS) - 1
WORD_MIN         = -(1 << (WORD_BITS - 1))
WORD_MAX         = (1 << (WORD_BITS - 1)) - 1

START_ADDRESS    = 0
HALT_SENTINEL    = WORD_MASK        # Largest unsigned address, never a valid pointer

DEFAULT_MAX_STEPS = 1_000_000       # duet-run gives up after this many steps
