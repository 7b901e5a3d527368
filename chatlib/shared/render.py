import re;

# resolved section sign codes, hex first: §x§R§R§G§G§B§B or §X
FORMAT_PATTERN = re.compile("§x(?:§[0-9A-Fa-f]){6}|§.");

ANSI_RESET = "\033[0m";

ANSI_CODES = \
{
    "0":"\033[30m",
    "1":"\033[34m",
    "2":"\033[32m",
    "3":"\033[36m",
    "4":"\033[31m",
    "5":"\033[35m",
    "6":"\033[33m",
    "7":"\033[37m",
    "8":"\033[90m",
    "9":"\033[94m",
    "a":"\033[92m",
    "b":"\033[96m",
    "c":"\033[91m",
    "d":"\033[95m",
    "e":"\033[93m",
    "f":"\033[97m",
    "l":"\033[1m",
    "m":"\033[9m",
    "n":"\033[4m",
    "o":"\033[3m",
    "r":"\033[0m"
};


def StripFormatting(text : str) -> str:
    if text == None or len(text) == 0:
        return "";
    return FORMAT_PATTERN.sub("", text);

def ToAnsi(text : str) -> str:
    '''
    Converts resolved chat text into ANSI escape sequences for a terminal.
    Hex colors become 24 bit colors, §k has no terminal equivalent and is dropped.
    A reset is appended when anything was emitted.
    '''
    if text == None or len(text) == 0:
        return "";
    emitted = False;

    def _Replace(match : re.Match) -> str:
        nonlocal emitted;
        code = match.group(0);
        if code.startswith("§x") and len(code) == 14:
            digits = code[3::2];
            r = int(digits[0:2], 16);
            g = int(digits[2:4], 16);
            b = int(digits[4:6], 16);
            emitted = True;
            return "\033[38;2;%d;%d;%dm" % (r, g, b);
        ansi = ANSI_CODES.get(code[1].lower());
        if ansi != None:
            emitted = True;
            return ansi;
        return "";

    result = FORMAT_PATTERN.sub(_Replace, text);
    if emitted:
        result += ANSI_RESET;
    return result;
