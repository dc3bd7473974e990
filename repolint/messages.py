from termcolor import colored

###############################################################################
# Output prefixes
###############################################################################

CHECKMARK    = '[' + colored("✓", "green") + ']'
CROSSMARK    = '[' + colored("✗", "red") + ']'
INFOMARK     = '[' + colored("i", "blue") + ']'

SEPARATOR = '-' * 63

def _message(prefix: str, raw_prefix: str, *args):
    msg = '\n'.join(str(arg) for arg in args)
    first = True
    for line in msg.split('\n'):
        if first: print(f"{prefix} {line}")
        else:     print(f"{' ' * len(raw_prefix)} {line}")
        first = False

# Use CROSSMARK for errors
def error(*msg): _message(CROSSMARK, '[✗]', *msg)

# Use INFOMARK for information
def info(*msg): _message(INFOMARK, '[i]', *msg)

# Use CHECKMARK for success
def success(*msg): _message(CHECKMARK, '[✓]', *msg)


###############################################################################
# Check status lines
###############################################################################

def separator() -> None:
    print(SEPARATOR)

def running(name: str) -> None:
    print(colored(f"Running check: {name}", "yellow"))

def passed() -> None:
    print(colored("PASSED", "green"))

def failed(reason: str) -> None:
    print(colored(f"FAILED: {reason}", "red"))
