"""
A simple, light-weight way to pass-around and manipulate points and spans within a collection of source texts.
The concept is simple: Use integers, with spans of them associated to specific texts.
A text is either a file or a single line typed at the prompt.
"""
from bisect import bisect_right
from pathlib import Path
from typing import NamedTuple, Optional
from boozetools.support.failureprone import SourceText

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path]
	slice: slice
	source: SourceText

_slices: list[slice] = []
_bounds: list[int] = []
_paths: list[Optional[Path]] = []
_texts: list[SourceText] = []

def reset_location_index():
	for it in _slices, _bounds, _paths, _texts: it.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None, "")
	insert_token(slice(0,0))

def start_segment(path:Optional[Path], text:str):
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices))
	_paths.append(path)
	_texts.append(SourceText(text, filename=str(path or "<stdin>")))

def insert_token(s:slice) -> int:
	index = len(_slices)
	_slices.append(s)
	return index

def _segment(index:int) -> int:
	return bisect_right(_bounds, index)-1

def lookup_token(index:int) -> Span:
	seg = _segment(index)
	return Span(_paths[seg], _slices[index], _texts[seg])

def lookup_span(first: int, last:int) -> Span:
	left = lookup_token(first)
	right = lookup_token(last)
	assert left.path == right.path
	return Span(left.path, slice(left.slice.start, right.slice.stop), left.source)

reset_location_index()
