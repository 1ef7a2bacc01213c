"""
Keys - Field names of the remote wire format and of the local JSON format.
"""


class WireKeys:
    """JSON keys used by the remote task service."""

    ACTION_ID = "action_id"
    ACTION_LIST = "action_list"
    ACTION_TYPE = "action_type"
    CLIENT_VERSION = "client_version"
    COMPLETED = "completed"
    CREATOR_ID = "creator_id"
    DELETED = "deleted"
    DEST_LIST = "dest_list"
    DEST_PARENT = "dest_parent"
    DEST_PARENT_TYPE = "dest_parent_type"
    ENTITY_DELTA = "entity_delta"
    ENTITY_TYPE = "entity_type"
    GET_DELETED = "get_deleted"
    ID = "id"
    INDEX = "index"
    LAST_MODIFIED = "last_modified"
    LIST_ID = "list_id"
    LISTS = "lists"
    NAME = "name"
    NEW_ID = "new_id"
    NOTES = "notes"
    PARENT_ID = "parent_id"
    PRIOR_SIBLING_ID = "prior_sibling_id"
    RESULTS = "results"
    SOURCE_LIST = "source_list"
    TASKS = "tasks"


class ActionType:
    """Values of the action_type field."""

    CREATE = "create"
    UPDATE = "update"
    MOVE = "move"
    GET_ALL = "get_all"


class EntityType:
    """Values of the entity_type field."""

    GROUP = "GROUP"
    TASK = "TASK"


class LocalKeys:
    """Keys of the local JSON exchanged with the local store."""

    META_NOTE = "meta_note"
    META_DATA = "meta_data"
    META_GID = "meta_gid"

    # note columns
    ID = "id"
    TYPE = "type"
    SNIPPET = "snippet"

    # data columns
    MIME_TYPE = "mime_type"
    CONTENT = "content"


class Folders:
    """Remote naming of local folders."""

    PREFIX = "[MIUI_Notes]"
    DEFAULT = "Default"
    CALL_NOTE = "Call_Note"
    META = "METADATA"

    ROOT_FOLDER_ID = 0
    CALL_RECORD_FOLDER_ID = -2

    META_NOTE_NAME = "[META INFO] DON'T UPDATE AND DELETE"

    NOTE_MIME_TYPE = "vnd.android.cursor.item/text_note"
