import socket;
import re;
import struct;
import json;
import logging;
import threading;
import chatlib.shared.timeutil as timeutil;

Log = logging.getLogger(__name__);

PACKET_TYPE_RESPONSE = 0;
PACKET_TYPE_COMMAND = 2;
PACKET_TYPE_LOGIN = 3;

AUTH_FAILED_ID = -1;

# id + type + two terminating nulls
PACKET_OVERHEAD = 10;
MAX_CHUNK_LENGTH = 256;
# "§x" plus six "§h" pairs
MIN_CHUNK_LENGTH = 14;
HEX_RUN_PATTERN = re.compile("§x(?:§[0-9A-Fa-f]){6}");

class RconError(Exception):
    pass;

class RconAuthError(RconError):
    pass;

def EncodePacket(requestId : int, packetType : int, payload : str) -> bytes:
    body = struct.pack("<ii", requestId, packetType) + payload.encode("UTF-8") + b"\x00\x00";
    return struct.pack("<i", len(body)) + body;

def DecodePacket(data : bytes) -> tuple[int, int, str]:
    ''' data is a packet body without its length prefix. '''
    if len(data) < PACKET_OVERHEAD:
        raise RconError("Packet too short : %d bytes" % len(data));
    requestId, packetType = struct.unpack("<ii", data[:8]);
    payload = data[8:-2].decode("UTF-8", errors="ignore");
    return requestId, packetType, payload;

def TruncateMessage(message : str, size : int = MAX_CHUNK_LENGTH) -> list[str]:
    '''
    Splits a message into chunks of at most size characters.
    A chunk never ends between a section sign and its code, nor inside a §x§R§R§G§G§B§B hex color.
    '''
    if size < MIN_CHUNK_LENGTH:
        raise ValueError("Chunk size %d is smaller than a hex color sequence (%d)" % (size, MIN_CHUNK_LENGTH));
    runs = [(match.start(), match.end()) for match in HEX_RUN_PATTERN.finditer(message)];
    result = list[str]();
    start = 0;
    l = len(message);
    while l - start > size:
        end = start + size;
        insideRun = False;
        for runStart, runEnd in runs:
            if runStart < end < runEnd:
                end = runStart;
                insideRun = True;
                break;
        if not insideRun and message[end - 1] == "§":
            end -= 1;
        if end <= start:
            end = start + size;
        result.append(message[start:end]);
        start = end;
    result.append(message[start:]);
    return result;

class RCON(object):
    """Minecraft remote console client over TCP."""
    def __init__(self, address : tuple, password : str, timeout : float = 5.0, frameTime : float = 0.02, rate : int = 5):
        self._address = address;
        self._password = password;
        self._timeout = timeout;
        self._sockLock = threading.Lock();
        self._sock = None;
        self._isOpened = False;
        self._requestId = 0;
        self._bytesSent = 0;
        self._bytesRead = 0;
        self._limiter = timeutil.RateLimiter(frameTime, rate);

    def __del__(self):
        if self._isOpened:
            self.Close();

    def IsOpened(self) -> bool:
        return self._isOpened;

    def Open(self):
        if not self._isOpened:
            Log.debug("Connecting to rcon at %s:%s", self._address[0], self._address[1]);
            try:
                self._sock = socket.create_connection(self._address, timeout=self._timeout);
            except OSError as ex:
                raise RconError("Unable to connect to %s:%s : %s" % (self._address[0], self._address[1], str(ex))) from ex;
            self._isOpened = True;
            try:
                self._Login();
            except RconError:
                self.Close();
                raise;

    def Close(self):
        if self._isOpened:
            with self._sockLock:
                try:
                    self._sock.close();
                except OSError as ex:
                    Log.debug("Error closing rcon socket : %s", str(ex));
                self._sock = None;
            self._isOpened = False;

    def _NextId(self) -> int:
        self._requestId += 1;
        if self._requestId >= 0x7FFFFFFF:
            self._requestId = 1;
        return self._requestId;

    def _Send(self, packetType : int, payload : str) -> int:
        requestId = self._NextId();
        data = EncodePacket(requestId, packetType, payload);
        self._sock.sendall(data);
        self._bytesSent += len(data);
        return requestId;

    def _ReadExactly(self, count : int) -> bytes:
        result = b'';
        while len(result) < count:
            chunk = self._sock.recv(count - len(result));
            if chunk == b'':
                self._isOpened = False;
                raise RconError("Remote host closed the RCON connection.");
            result += chunk;
        self._bytesRead += len(result);
        return result;

    def _ReadPacket(self) -> tuple[int, int, str]:
        length = struct.unpack("<i", self._ReadExactly(4))[0];
        return DecodePacket(self._ReadExactly(length));

    def _Login(self):
        with self._sockLock:
            try:
                requestId = self._Send(PACKET_TYPE_LOGIN, self._password);
                responseId, packetType, _ = self._ReadPacket();
                # some servers send an empty response before the auth response
                if packetType == PACKET_TYPE_RESPONSE and responseId == requestId:
                    responseId, packetType, _ = self._ReadPacket();
            except (OSError, struct.error) as ex:
                raise RconError("Rcon login failed : %s" % str(ex)) from ex;
        if responseId == AUTH_FAILED_ID:
            raise RconAuthError("Rcon password was rejected by %s:%s" % (self._address[0], self._address[1]));
        Log.info("Authenticated to rcon at %s:%s", self._address[0], self._address[1]);

    # waits for the response of the command
    def Request(self, command : str) -> str:
        if not self.IsOpened():
            raise RconError("Rcon connection is not opened");
        self._limiter.Acquire();
        with self._sockLock:
            try:
                requestId = self._Send(PACKET_TYPE_COMMAND, command);
                responseId, packetType, payload = self._ReadPacket();
            except (OSError, struct.error) as ex:
                raise RconError("Rcon request failed : %s" % str(ex)) from ex;
        if responseId != requestId:
            Log.warning("Rcon response id %d does not match request id %d", responseId, requestId);
        Log.debug("Rcon '%s' -> '%s'", command, payload);
        return payload;

    def Say(self, msg : str) -> str:
        responses = [];
        for chunk in TruncateMessage(msg):
            responses.append(self.Request("say %s" % chunk));
        return "".join(responses);

    def Tell(self, player : str, msg : str) -> str:
        responses = [];
        for chunk in TruncateMessage(msg):
            responses.append(self.Request("tellraw %s %s" % (player, json.dumps({"text":chunk}))));
        return "".join(responses);

    def List(self) -> list[str]:
        ''' Online player names, parsed from "There are N of a max of M players online: a, b". '''
        response = self.Request("list");
        if ":" not in response:
            return [];
        names = response.split(":", 1)[1].strip();
        if names == "":
            return [];
        return [name.strip() for name in names.split(",") if name.strip() != ""];

    def GetStats(self) -> tuple[int, int]:
        return self._bytesSent, self._bytesRead;
