import typing as t

JSONValue = t.Union[str, int, float, bool, None, 'JSONDict', 'JSONList']
JSONDict = t.Dict[str, JSONValue]
JSONList = t.List[JSONValue]

Key = t.Tuple[str, ...]
"""Path of nested keys leading to a value inside a document."""
