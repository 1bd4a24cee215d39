import pytest

from intcode.errors import ProgramFormatError
from intcode.loader import load_program, parse_program


class TestParseProgram:
    def test_simple(self):
        assert parse_program("1,0,0,0,99") == [1, 0, 0, 0, 99]

    def test_whitespace_and_trailing_newline(self):
        assert parse_program(" 1, -2 ,\n3,99\n") == [1, -2, 3, 99]

    def test_trailing_comma(self):
        assert parse_program("104,5,99,") == [104, 5, 99]

    def test_big_words(self):
        assert parse_program("104,1125899906842624,99")[1] == 1125899906842624

    def test_empty(self):
        with pytest.raises(ProgramFormatError):
            parse_program("  \n")

    def test_junk_token(self):
        with pytest.raises(ProgramFormatError, match="'x' at index 1"):
            parse_program("1,x,3")

    def test_empty_token(self):
        with pytest.raises(ProgramFormatError):
            parse_program("1,,3")


def test_load_program(tmp_path):
    path = tmp_path / "program.txt"
    path.write_text("1,9,10,3,2,3,11,0,99,30,40,50\n")
    assert load_program(path) == [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]
    assert load_program(str(path))[0] == 1
