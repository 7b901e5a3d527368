import re;
import logging;

Log = logging.getLogger(__name__);

COLOR_CHAR = "&";
SECTION_CHAR = "§";
HEX_PATTERN = re.compile("&#([A-Fa-f0-9]{6})");
LEGACY_PATTERN = re.compile("&[0-9A-Fa-fK-Ok-oRrXx]");
ALL_CODES = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx";

# lowercase 6 digit hex -> "&x&r&r&g&g&b&b", never evicted
HEX_COLOR_CACHE = {};

def _BuildHexExpansion(hexDigits : str) -> str:
    parts = [COLOR_CHAR, "x"];
    for c in hexDigits:
        parts.append(COLOR_CHAR);
        parts.append(c);
    return "".join(parts);

def GetHexExpansion(hexDigits : str) -> str:
    ''' Read-through lookup of the legacy expansion for a 6 digit hex value. '''
    key = hexDigits.lower();
    cached = HEX_COLOR_CACHE.get(key);
    if cached == None:
        # first writer wins, a racing duplicate computes the same string
        cached = HEX_COLOR_CACHE.setdefault(key, _BuildHexExpansion(key));
        Log.debug("Cached hex expansion for %s", key);
    return cached;

def ExpandHexColors(text : str) -> str:
    ''' Rewrites every &#RRGGBB token into &x&r&r&g&g&b&b, leaving the rest untouched. '''
    if text == None or len(text) == 0:
        return "";
    result = [];
    last = 0;
    for match in HEX_PATTERN.finditer(text):
        result.append(text[last:match.start()]);
        result.append(GetHexExpansion(match.group(1)));
        last = match.end();
    if last == 0:
        return text;
    result.append(text[last:]);
    return "".join(result);

def TranslateAlternateColorCodes(altChar : str, text : str) -> str:
    '''
    Replaces altChar with the section sign wherever it is followed by a known code character.
    Unknown sequences are kept as they are.
    '''
    if text == None or len(text) == 0:
        return "";
    chars = list(text);
    for i in range(len(chars) - 1):
        if chars[i] == altChar and chars[i+1] in ALL_CODES:
            chars[i] = SECTION_CHAR;
            chars[i+1] = chars[i+1].lower();
    return "".join(chars);

def Colorize(text : str) -> str:
    if text == None or len(text) == 0:
        return "";
    return TranslateAlternateColorCodes(COLOR_CHAR, ExpandHexColors(text));

def StripColorCodes(text : str) -> str:
    if text == None or len(text) == 0:
        return "";
    # hex first so a half removed token does not leave legacy looking leftovers
    text = HEX_PATTERN.sub("", text);
    text = LEGACY_PATTERN.sub("", text);
    return text.replace(COLOR_CHAR, "");
