"""
Target Sequence Provider

Ground-truth digit sequences for each drilled constant, including the leading
integer digit. Sequences are configuration data: they are loaded once and never
mutated.
"""

from __future__ import annotations

from functools import lru_cache

from core.digits.constants import ConstantKind
from core.digits.errors import EmptyTargetSequenceError


PI_DIGITS = (
    "314159265358979323846264338327950288419716939937510582097494"
    "459230781640628620899862803482534211706798214808651328230664"
    "709384460955058223172535940812848111745028410270193852110555"
    "964462294895493038196442881097566593344612847564823378678316"
    "527120190914564856692346034861045432664821339360726024914127"
    "372458700660631558817488152092096282925409171536436789259036"
    "001133053054882046652138414695194151160943305727036575959195"
    "309218611738193261179310511854807446237996274956735188575272"
    "489122793818301194912983367336244065664308602139494639522473"
    "719070217986094370277053921717629317675238467481846766940513"
    "200056812714526356082778577134275778960917363717872146844090"
    "122495343014654958537105079227968925892354201995611212902196"
    "086403441815981362977477130996051870721134999999837297804995"
    "105973173281609631859502445945534690830264252230825334468503"
    "526193118817101000313783875288658753320838142061717766914730"
    "359825349042875546873115956286388235378759375195778185778053"
    "21712268066130019278766111959092164201989")

PHI_DIGITS = (
    "161803398874989484820458683436563811772030917980576286213544"
    "862270526046281890244970720720418939113748475408807538689175"
    "212663386222353693179318006076672635443338908659593958290563"
    "832266131992829026788067520876689250171169620703222104321626"
    "954862629631361443814975870122034080588795445474924618569536"
    "486444924104432077134494704956584678850987433944221254487706"
    "647809158846074998871240076521705751797883416625624940758906"
    "970400028121042762177111777805315317141011704666599146697987"
    "317613560067087480710131795236894275219484353056783002287856"
    "997829778347845878228911097625003026961561700250464338243776"
    "486102838312683303724292675263116533924731671112115881863851"
    "331620384005222165791286675294654906811317159934323597349498"
    "509040947621322298101726107059611645629909816290555208524790"
    "352406020172799747175342777592778625619432082750513121815628"
    "551222480939471234145170223735805772786160086883829523045926"
    "478780178899219902707769038953219681986151437803149974110692"
    "60886742962267575605231727775203536139362")

E_DIGITS = (
    "271828182845904523536028747135266249775724709369995957496696"
    "762772407663035354759457138217852516642742746639193200305992"
    "181741359662904357290033429526059563073813232862794349076323"
    "382988075319525101901157383418793070215408914993488416750924"
    "476146066808226480016847741185374234544243710753907774499206"
    "955170276183860626133138458300075204493382656029760673711320"
    "070932870912744374704723069697720931014169283681902551510865"
    "746377211125238978442505695369677078544996996794686445490598"
    "793163688923009879312773617821542499922957635148220826989519"
    "366803318252886939849646510582093923982948879332036250944311"
    "730123819706841614039701983767932068328237646480429531180232"
    "878250981945581530175671736133206981125099618188159304169035"
    "159888851934580727386673858942287922849989208680582574927961"
    "048419844436346324496848756023362482704197862320900216099023"
    "530436994184914631409343173814364054625315209618369088870701"
    "676839642437814059271456354906130310720851038375051011574770"
    "4171")


_DIGITS_BY_KIND = {
    ConstantKind.PI: PI_DIGITS,
    ConstantKind.PHI: PHI_DIGITS,
    ConstantKind.E: E_DIGITS,
}


def validate_sequence(digits) -> tuple[str, ...]:
    """
    Check a candidate target sequence and return it as a tuple of symbols.

    Raises:
        EmptyTargetSequenceError: If the sequence has no digits
        ValueError: If any symbol is not a single ASCII digit
    """
    sequence = tuple(digits)
    if not sequence:
        raise EmptyTargetSequenceError("Target sequence is empty")
    for index, symbol in enumerate(sequence):
        if len(symbol) != 1 or symbol not in "0123456789":
            raise ValueError(f"Invalid digit {symbol!r} at position {index}")
    return sequence


@lru_cache(maxsize=None)
def get_target_sequence(kind: ConstantKind) -> tuple[str, ...]:
    """
    Return the fixed digit sequence for a constant.

    The tuple is cached, so repeated calls return the same object and
    indexing is O(1).
    """
    return validate_sequence(_DIGITS_BY_KIND[ConstantKind(kind)])


def sequence_length(kind: ConstantKind) -> int:
    """Number of target digits available for a constant."""
    return len(get_target_sequence(kind))
