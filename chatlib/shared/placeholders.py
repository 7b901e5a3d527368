class PlaceholderError(IndexError):
    pass;

def Pairs(placeholders) -> list[tuple[str, str]]:
    ''' Splits a flat [token, value, token, value...] sequence into (token, value) tuples. '''
    placeholders = list(placeholders);
    if len(placeholders) % 2 != 0:
        raise PlaceholderError("Placeholder sequence has odd length %d, last token %r has no value" % (len(placeholders), placeholders[-1]));
    result = [];
    for i in range(0, len(placeholders), 2):
        result.append((str(placeholders[i]), str(placeholders[i+1])));
    return result;

# replacements are applied in order, a later pair can match text introduced by an earlier value
def Format(message : str, *placeholders) -> str:
    # validated even for an empty message, same as FormatList
    pairs = Pairs(placeholders);
    if message == None or len(message) == 0:
        return "";
    result = message;
    for token, value in pairs:
        result = result.replace(token, value);
    return result;

def FormatMap(message : str, mapping : dict) -> str:
    if message == None or len(message) == 0:
        return "";
    result = message;
    for token in mapping:
        result = result.replace(str(token), str(mapping[token]));
    return result;

def FormatList(lines : list[str], *placeholders) -> list[str]:
    # validate once up front, an empty list still rejects a broken sequence
    Pairs(placeholders);
    return [Format(line, *placeholders) for line in lines];
