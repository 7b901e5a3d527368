import time;
from datetime import datetime, timedelta, timezone;

INVALID_TIME = -1;

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S";

UNIT_SECONDS = \
{
    "s":1,
    "m":60,
    "h":3600,
    "d":86400
};

# 4500000 -> "1h 15m", 0 -> "0s"
def FormatDuration(millis : int) -> str:
    seconds = int(millis) // 1000;
    hours = seconds // 3600;
    seconds %= 3600;
    minutes = seconds // 60;
    seconds %= 60;
    parts = [];
    if hours > 0:
        parts.append("%dh" % hours);
    if minutes > 0:
        parts.append("%dm" % minutes);
    if seconds > 0 or len(parts) == 0:
        parts.append("%ds" % seconds);
    return " ".join(parts);

def DurationToEpochMillis(now : datetime, text : str) -> int:
    '''
    Converts a duration like "10s", "5m", "2h" or "1d" into epoch milliseconds relative to now.
    Returns INVALID_TIME for an unknown unit suffix, a non numeric amount raises ValueError.
    '''
    if text == None or len(text) < 2:
        raise ValueError("Duration %r is too short" % text);
    if now == None:
        now = datetime.now(timezone.utc);
    unit = text[-1];
    amount = int(text[:-1]);
    if unit not in UNIT_SECONDS:
        return INVALID_TIME;
    target = now + timedelta(seconds = amount * UNIT_SECONDS[unit]);
    return int(target.timestamp() * 1000);

# UTC unless a zone is given, the host zone is never used
def FormatTimestamp(millis : int, tz : timezone = timezone.utc) -> str:
    return datetime.fromtimestamp(millis / 1000, tz).strftime(TIMESTAMP_FORMAT);


class RateLimiter():
    ''' Allows at most rate calls per frameTime seconds, blocking the caller when exceeded. '''
    def __init__(self, frameTime : float = 0.02, rate : int = 5):
        self._frameTime = frameTime;
        self._rate = rate;
        self._counter = 0;
        self._lastCheckTick = time.time();

    def Acquire(self):
        curTick = time.time();
        if curTick - self._lastCheckTick >= self._frameTime:
            self._counter = 0;
            self._lastCheckTick = curTick;
        elif self._counter >= self._rate:
            time.sleep(self._frameTime);
            self._counter = 0;
            self._lastCheckTick = time.time();
        self._counter += 1;

    def GetCounter(self) -> int:
        return self._counter;
