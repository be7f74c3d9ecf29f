import pytest

from chip8vm import FatalExecutionError, Reason
from chip8vm.decoder import Op, decode


@pytest.mark.parametrize("opcode, op", [
    (0x00E0, Op.CLS),
    (0x00EE, Op.RET),
    (0x0123, Op.SYS),
    (0x1ABC, Op.JP),
    (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_VX_BYTE),
    (0x4A12, Op.SNE_VX_BYTE),
    (0x5AB0, Op.SE_VX_VY),
    (0x6A12, Op.LD_VX_BYTE),
    (0x7A12, Op.ADD_VX_BYTE),
    (0x8AB0, Op.LD_VX_VY),
    (0x8AB1, Op.OR),
    (0x8AB2, Op.AND),
    (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_VX_VY),
    (0x8AB5, Op.SUB),
    (0x8AB6, Op.SHR),
    (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_VX_VY),
    (0xA123, Op.LD_I),
    (0xB123, Op.JP_V0),
    (0xCA12, Op.RND),
    (0xDAB5, Op.DRW),
    (0xEA9E, Op.SKP),
    (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT),
    (0xFA0A, Op.LD_VX_K),
    (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX),
    (0xFA1E, Op.ADD_I_VX),
    (0xFA29, Op.LD_F_VX),
    (0xFA33, Op.LD_B_VX),
    (0xFA55, Op.LD_I_VX),
    (0xFA65, Op.LD_VX_I),
])
def test_decode_op(opcode, op):
    assert decode(opcode).op is op


def test_decode_fields():
    ins = decode(0xD7A5)
    assert ins.a == 0x7A5
    assert ins.b == 0xA5
    assert ins.n == 0x5
    assert ins.x == 0x7
    assert ins.y == 0xA
    assert ins.opcode == 0xD7A5


@pytest.mark.parametrize("opcode", [0x8AB8, 0x8ABF, 0xE000, 0xEA9F, 0xF000, 0xFA66, 0xFFFF])
def test_unknown_instruction(opcode):
    with pytest.raises(FatalExecutionError) as exc:
        decode(opcode)
    assert exc.value.reason is Reason.UNKNOWN_INSTRUCTION
