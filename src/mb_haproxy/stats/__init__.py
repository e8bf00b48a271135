"""HAProxy stats socket client: command encoding, response decoding, connections."""

from mb_haproxy.stats.connection import DEFAULT_SOCKET_PATH as DEFAULT_SOCKET_PATH
from mb_haproxy.stats.connection import Connection as Connection
from mb_haproxy.stats.connection import ConnectionBuilder as ConnectionBuilder
from mb_haproxy.stats.connection import TcpSocketBuilder as TcpSocketBuilder
from mb_haproxy.stats.connection import UnixSocketBuilder as UnixSocketBuilder
from mb_haproxy.stats.errors import ConnectionConsumedError as ConnectionConsumedError
from mb_haproxy.stats.errors import HaproxyError as HaproxyError
from mb_haproxy.stats.errors import IoError as IoError
from mb_haproxy.stats.errors import MissingParametersError as MissingParametersError
from mb_haproxy.stats.errors import ParseFailureError as ParseFailureError
from mb_haproxy.stats.errors import UnknownIdError as UnknownIdError
from mb_haproxy.stats.requests import AclId as AclId
from mb_haproxy.stats.requests import AllBackends as AllBackends
from mb_haproxy.stats.requests import BackendIndex as BackendIndex
from mb_haproxy.stats.requests import BackendName as BackendName
from mb_haproxy.stats.requests import ErrorFlag as ErrorFlag
from mb_haproxy.stats.responses import Acl as Acl
from mb_haproxy.stats.responses import AclEntry as AclEntry
from mb_haproxy.stats.responses import CliSocket as CliSocket
from mb_haproxy.stats.responses import Level as Level
