''' Machine and assembler errors '''


class DuetError(Exception):
    pass


class MalformedOperand(DuetError):
    def __init__(self, token: str):
        super().__init__(f'Malformed operand {token!r}')
        self.token = token


class MalformedInstruction(DuetError):
    def __init__(self, line: str, lineno: int | None = None):
        if lineno is None:
            message = f'Malformed instruction {line!r}'
        else:
            message = f'Malformed instruction {line!r} at line {lineno}'

        super().__init__(message)
        self.line = line
        self.lineno = lineno


class RegisterIndexOutOfRange(DuetError):
    def __init__(self, name: str):
        super().__init__(f'Register {name!r} is outside a..z')
        self.name = name


class DivisionByZero(DuetError, ZeroDivisionError):
    def __init__(self, instruction):
        super().__init__(f'Division by zero in {instruction}')
        self.instruction = instruction


class MachineHalted(DuetError):
    pass
