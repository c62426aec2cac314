from .channels import *
from .embeds import *
from .emotes import *
from .gateway import *
from .messages import *
from .server_members import *
from .servers import *
from .users import *
