import pytest

from fitstruct.cards import Card
from fitstruct.enum import AccumulatorState, UnitKind
from fitstruct.header import Header, HeaderAccumulator, classify
from fitstruct.values import Boolean, Integer, Text, infer


def make_header(*pairs):
    cards = [Card(keyword, infer(value)) for keyword, value in pairs]
    cards.append(Card('END'))
    return Header(cards, n_blocks=1)


def test_accumulator_single_block(header_bytes, card):
    block = header_bytes([('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '0')])
    # whatever follows END is padding, even if it looks like a card
    block = block[:4 * 80] + card('BOGUS', '1') + block[5 * 80:]

    accumulator = HeaderAccumulator()

    assert accumulator.state == AccumulatorState.ACCUMULATING
    assert accumulator.feed(block)
    assert accumulator.state == AccumulatorState.DONE

    header = accumulator.header

    assert header.keywords == ['SIMPLE', 'BITPIX', 'NAXIS', 'END']
    assert 'BOGUS' not in header
    assert header.n_blocks == 1


def test_accumulator_two_blocks(header_bytes):
    cards = [('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '0')]
    cards += [('KEY%d' % _, str(_)) for _ in range(37)]
    raw = header_bytes(cards)

    assert len(raw) == 2 * 2880

    accumulator = HeaderAccumulator()

    assert not accumulator.feed(raw[:2880])
    with pytest.raises(ValueError):
        accumulator.header
    assert accumulator.feed(raw[2880:])

    header = accumulator.header

    assert len(header) == 41
    assert header.n_blocks == 2
    assert header.keywords[:3] == ['SIMPLE', 'BITPIX', 'NAXIS']
    assert header.keywords[3:-1] == ['KEY%d' % _ for _ in range(37)]
    assert header.keywords[-1] == 'END'
    assert header['KEY36'] == 36


def test_accumulator_refuses_more_blocks(header_bytes):
    accumulator = HeaderAccumulator()
    accumulator.feed(header_bytes([('SIMPLE', 'T')]))

    with pytest.raises(ValueError):
        accumulator.feed(header_bytes([('SIMPLE', 'T')]))


@pytest.mark.parametrize('first,expected', [
    (Card('SIMPLE', Boolean(True)), UnitKind.IMAGE),
    (Card('XTENSION', Text('IMAGE')), UnitKind.IMAGE),
    (Card('XTENSION', Text('BINTABLE')), UnitKind.BINARY_TABLE),
    (Card('XTENSION', Text('A3DTABLE')), UnitKind.BINARY_TABLE),
    (Card('XTENSION', Text('TABLE')), UnitKind.ASCII_TABLE),
    (Card('XTENSION', Text('FOREIGN')), UnitKind.UNKNOWN),
    (Card('XTENSION', Integer(3)), UnitKind.UNKNOWN),
    (Card('NAXIS', Integer(0)), UnitKind.UNKNOWN),
    (Card(''), UnitKind.UNKNOWN),
])
def test_classify(first, expected):
    assert classify([first, Card('END')]) == expected


def test_classify_empty():
    assert classify([]) == UnitKind.UNKNOWN


def test_classify_looks_only_at_the_first_card():
    cards = [Card('BITPIX', Integer(8)), Card('SIMPLE', Boolean(True))]

    assert classify(cards) == UnitKind.UNKNOWN


def test_image_data_length():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '16'), ('NAXIS', '2'), ('NAXIS1', '10'), ('NAXIS2', '10'))

    assert header.unit_kind == UnitKind.IMAGE
    assert header.shape == [10, 10]
    assert header.declared_data_length == 200


def test_negative_bitpix_data_length():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '-64'), ('NAXIS', '1'), ('NAXIS1', '3'))

    assert header.declared_data_length == 24


def test_no_axes_no_data():
    assert make_header(('SIMPLE', 'T'), ('BITPIX', '32'), ('NAXIS', '0')).declared_data_length == 0
    assert make_header(('SIMPLE', 'T'), ('BITPIX', '32')).declared_data_length == 0
    assert make_header(('SIMPLE', 'T'), ('NAXIS', '1'), ('NAXIS1', '3')).declared_data_length == 0


def test_binary_table_data_length():
    header = make_header(
        ('XTENSION', "'BINTABLE'"),
        ('BITPIX', '8'),
        ('NAXIS', '2'),
        ('NAXIS1', '12'),
        ('NAXIS2', '5'),
        ('PCOUNT', '40'),
        ('GCOUNT', '1'),
        ('TFIELDS', '2'),
    )

    assert header.unit_kind == UnitKind.BINARY_TABLE
    assert header.declared_data_length == 12 * 5 + 40


def test_ascii_table_data_length():
    header = make_header(
        ('XTENSION', "'TABLE   '"),
        ('BITPIX', '8'),
        ('NAXIS', '2'),
        ('NAXIS1', '17'),
        ('NAXIS2', '3'),
        ('PCOUNT', '0'),
        ('GCOUNT', '1'),
    )

    assert header.unit_kind == UnitKind.ASCII_TABLE
    assert header.declared_data_length == 51


def test_random_groups_data_length():
    header = make_header(
        ('SIMPLE', 'T'),
        ('BITPIX', '-32'),
        ('NAXIS', '3'),
        ('NAXIS1', '0'),
        ('NAXIS2', '4'),
        ('NAXIS3', '2'),
        ('GROUPS', 'T'),
        ('PCOUNT', '3'),
        ('GCOUNT', '5'),
    )

    assert header.is_random_groups
    assert header.declared_data_length == 4 * 5 * (3 + 4 * 2)


def test_missing_axis_counts_as_zero():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '2'), ('NAXIS1', '10'))

    assert header.shape == [10, 0]
    assert header.declared_data_length == 0


def test_missing_axis_stops_the_shape():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '20000000'), ('NAXIS1', '10'))

    assert header.shape == []
    assert header.declared_data_length == 0

    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '999'), ('NAXIS1', '10'), ('NAXIS3', '10'))

    assert header.shape == [10, 0]
    assert header.declared_data_length == 0


@pytest.mark.parametrize('naxis', ['-1', '1000'])
def test_naxis_out_of_range(naxis):
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', naxis), ('NAXIS1', '10'))

    assert header.shape == []
    assert header.declared_data_length == 0


@pytest.mark.parametrize('extra', [
    [('NAXIS2', '-3')],
    [('NAXIS2', '3'), ('GCOUNT', '-1')],
    [('NAXIS2', '3'), ('PCOUNT', '-100')],
])
def test_negative_sizes_mean_no_data(extra):
    header = make_header(('XTENSION', "'BINTABLE'"), ('BITPIX', '8'), ('NAXIS', '2'), ('NAXIS1', '12'), *extra)

    assert header.declared_data_length == 0


def test_later_duplicates_override():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '1'), ('NAXIS1', '10'), ('NAXIS1', '20'))

    assert header['NAXIS1'] == 20
    assert header.declared_data_length == 20


def test_non_integer_sizing_keyword_is_ignored():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', "'8'"), ('NAXIS', '1'), ('NAXIS1', '20'))

    assert header.get_int('BITPIX') is None
    assert header.declared_data_length == 0


def test_header_lookup():
    header = make_header(
        ('XTENSION', "'IMAGE'"),
        ('BITPIX', '8'),
        ('NAXIS', '0'),
        ('EXTNAME', "'SCI'"),
        ('EXTVER', '2'),
        ('EXPTIME', '1.5'),
    )

    assert header['BITPIX'] == 8
    assert header['EXPTIME'] == 1.5
    assert header[0].keyword == 'XTENSION'
    assert header.get('MISSING') is None
    assert header.get('MISSING', 3) == 3
    assert 'EXTNAME' in header
    assert 'MISSING' not in header
    assert header.name == 'SCI'
    assert header.version == 2

    with pytest.raises(KeyError):
        header['MISSING']

    assert list(header)[-1].keyword == 'END'


def test_header_without_name():
    header = make_header(('SIMPLE', 'T'), ('BITPIX', '8'), ('NAXIS', '0'))

    assert header.name is None
    assert header.version == 1
