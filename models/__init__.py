from models.base import Base
from models.workspace import Workspace
from models.account import Account, AccountRole
from models.embed_config import EmbedConfig
from models.embed_chat import EmbedChat
from models.api_key import ApiKey
from models.event_log import EventLog
