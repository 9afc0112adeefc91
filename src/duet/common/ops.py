# Mnemonics
SND = 'snd'  # emit X
SET = 'set'  # X -> R
ADD = 'add'  # R + X -> R
SUB = 'sub'  # R - X -> R
MUL = 'mul'  # R * X -> R
MOD = 'mod'  # R % X -> R (truncating)
RCV = 'rcv'  # next received -> R
JGZ = 'jgz'  # if X .gt 0 jump by Y
JNZ = 'jnz'  # if X .ne 0 jump by Y

# Decoding priority, first structural match wins
PRIORITY = [SND, SET, ADD, SUB, MUL, MOD, JGZ, JNZ, RCV]
