# dsfapi

Typed building blocks for the JSON protocol spoken by DuetControlServer, the
control server of the Duet Software Framework: commands, parsed G/M/T-codes
and their parameters, connection init messages, responses, and helpers for
parts of the machine model. Every message type converts to and from the plain
dictionaries that `json.dumps` and `json.loads` work with.

The package has no dependencies outside the standard library.

## Installation

```
pip install dsfapi
```

For running the test suite:

```
pip install "dsfapi[test]"
pytest
```

## Modules

- `dsfapi.types` – `CodeChannel` and `DriverId`.
- `dsfapi.messages` – `MessageType` and `Message`.
- `dsfapi.records` – `HttpEndpoint`, `UserSession`, `ParsedFileInfo` and
  their enums (`HttpEndpointType`, `AccessLevel`, `SessionType`).
- `dsfapi.initmessages` – `ClientInitMessage`, `InterceptInitMessage`,
  `SubscribeInitMessage`, `ServerInitMessage`, `command_init_message()` and
  the mode enums.
- `dsfapi.command` – the base `Command`, the generic `Response`, and the
  fixed commands `acknowledge()`, `cancel()`, `get_machine_model()`,
  `ignore()`, `sync_machine_model()`, `lock_machine_model()` and
  `unlock_machine_model()`.
- `dsfapi.codeparameter` – `CodeParameter`.
- `dsfapi.code` – `Code`, `CodeResult`, `CodeFlags`, `CodeType`,
  `KeywordType`.
- `dsfapi.commands` – `EvaluateExpression`, `Flush`, `GetFileInfo`,
  `Resolve`, `ResolvePath`, `SetMachineModel`, `SimpleCode`, `WriteMessage`.
- `dsfapi.httpcommands` – `add_http_endpoint()`, `remove_http_endpoint()`,
  `ReceivedHttpRequest`, `SendHttpResponse`, `HttpResponseType`,
  `AddUserSession`, `RemoveUserSession`.
- `dsfapi.kinematics` – `Kinematics` and its typed views.
- `dsfapi.filamentmonitors` – `FilamentMonitors` and its typed views.

## Building commands

```python
import json
from dsfapi.commands import SimpleCode
from dsfapi.types import CodeChannel

payload = json.dumps(SimpleCode("M115", CodeChannel.SBC).to_dict())
# {"Command": "SimpleCode", "Code": "M115", "Channel": "SBC"}
```

## Handshake messages

```python
from dsfapi.initmessages import ServerInitMessage, command_init_message

server = ServerInitMessage.from_dict({"version": 6, "id": 3})
server.is_compatible()            # True: version >= PROTOCOL_VERSION (6)
command_init_message().to_dict()  # {"Mode": "Command", "Version": 6}
```

`Response.from_dict` reads the server's reply to a command into `success`,
`result`, `error_type` and `error_message`.

## Codes and parameters

`CodeParameter.parse` turns the text of a parameter into an integer, float,
list or driver id where it can, and offers conversions such as `as_float()`,
`as_int_list()`, `as_uint()` or `as_driver_id()`. Conversions that do not
fit raise `ValueError`.

```python
from dsfapi.code import Code, CodeType
from dsfapi.codeparameter import CodeParameter

p = CodeParameter.parse("X", "1:2:3", False, False)
p.as_int_list()     # [1, 2, 3]

code = Code(type=CodeType.GCODE, major_number=1,
            parameters=[CodeParameter.parse("X", "10")])
str(code)           # "G1 X10"
code.parameter("x").as_int()   # 10 (letters are matched case-insensitively)
```

`Code.from_dict` and `Code.to_dict` convert codes to and from the JSON form
the server uses; `clone()`, `has_flag()`, `replace_parameter()` and
`remove_parameter()` work on a code in place or copy it.

Driver identifiers are `dsfapi.types.DriverId` values:

```python
from dsfapi.types import DriverId

DriverId.parse("1.2")               # DriverId(board=1, port=2)
DriverId.parse("1.2").as_uint64()   # 65538
```

## Machine model helpers

`Kinematics` and `FilamentMonitor` are plain dictionaries as found in the
machine model, and convert to concrete types on request:

```python
from dsfapi.kinematics import Kinematics
from dsfapi.filamentmonitors import FilamentMonitors

core = Kinematics(name="coreXY").as_core_kinematics()
core.forward_matrix     # identity matrix by default

monitors = FilamentMonitors([{"type": "laser", "enabled": True}])
monitors.get_as_laser(0).enabled    # True
```

Asking for the wrong type raises `ValueError`; an index out of range raises
`InvalidIndexError`.

## What this package does not do

It does not open sockets. There is no connection class, no handshake
driver, no subscription loop and no listener for custom HTTP endpoints: the
package builds and reads the messages, and sending them over the control
server's UNIX socket and reading the replies is left to the caller. It also
models only parts of the machine model (messages, HTTP endpoints, user
sessions, parsed file info, kinematics and filament monitors), not the whole
model.