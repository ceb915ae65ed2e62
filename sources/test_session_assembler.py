from conftest import logged
from format_resolver import FormatResolver
from models import AdapterType, ChargeStatsField as F, SideChannelSnapshot, SourceId
from session_assembler import SessionAssembler

BASE_LINE = "3,9000,2000, 80,4400,90,4450"
WLC_TEXT = "A:2\nD:1,2,3,4,5, 6,7\n"
# ac = [0xa, 0xb], rs = [0xc, 0xd, 0xe, 0xf, 0x1a]
PCA_TEXT = "D:a,b c,d,e,f,1a\n"
PDO_TEXT = "1, 85.5,1200,320, 10,5,2, 15,18,22, -200,-150,-100, 50,55,60\nD:1,2,3,4,5,6,7\n"


def snap(source, text):
    return SideChannelSnapshot(source=source, text=text, present=True)


def assemble(line=BASE_LINE, translate=lambda mode: 100 + mode, **channels):
    summary = FormatResolver().resolve(line)
    return SessionAssembler(translate).assemble(summary, **channels)


def slots(record):
    return [value for _, value in record.populated()]


def test_base_summary_populates_ten_slots():
    record = assemble()
    assert record.fields_size == 10
    assert slots(record) == [3, 9000, 2000, 80, 4400, 90, 4450, 0, 0, 0]
    assert record.get(F.ADAPTER_TYPE) == 3
    assert record.get(F.VOLTAGE_OUT) == 4450


def test_csi_summary_fills_csi_slots():
    record = assemble(BASE_LINE + " 3100 5,2")
    assert record.fields_size == 10
    assert slots(record)[7:] == [3100, 5, 2]


def test_wireless_extends_record():
    record = assemble(wireless=snap(SourceId.WIRELESS, WLC_TEXT))
    assert record.fields_size == 17
    assert record.get(F.ADAPTER_TYPE) == 102
    assert slots(record)[10:] == [1, 2, 3, 4, 5, 6, 7]


def test_default_translator_maps_sys_mode():
    summary = FormatResolver().resolve(BASE_LINE)
    record = SessionAssembler().assemble(summary, wireless=snap(SourceId.WIRELESS, WLC_TEXT))
    assert record.get(F.ADAPTER_TYPE) == AdapterType.WPC_EPP


def test_pca_without_wireless_forces_pps():
    record = assemble(pca=snap(SourceId.PCA, PCA_TEXT))
    assert record.fields_size == 17
    assert record.get(F.ADAPTER_TYPE) == AdapterType.USB_PD_PPS
    assert slots(record)[10:] == [0xA, 0xB, 0xE, 0xF, 0x1A, 0xC, 0xD]


def test_pca_with_wireless_keeps_wireless_type():
    record = assemble(
        wireless=snap(SourceId.WIRELESS, WLC_TEXT),
        pca=snap(SourceId.PCA, PCA_TEXT),
    )
    assert record.fields_size == 17
    assert record.get(F.ADAPTER_TYPE) == 102
    # 10, 11 and 15 from wireless; 12, 13, 14 and 16 from PCA
    assert slots(record)[10:] == [1, 2, 0xE, 0xF, 0x1A, 6, 0xD]


def test_pdo_line_overrides_last():
    record = assemble(
        wireless=snap(SourceId.WIRELESS, WLC_TEXT),
        pca=snap(SourceId.PCA, PCA_TEXT),
        gcharger=snap(SourceId.GCHARGER, PDO_TEXT),
    )
    assert record.get(F.RECEIVER_STATE_0) == 2
    assert record.get(F.RECEIVER_STATE_1) == 7
    assert slots(record)[15:] == [2, 7]


def test_pdo_without_extension_is_not_populated():
    record = assemble(gcharger=snap(SourceId.GCHARGER, PDO_TEXT))
    assert record.fields_size == 10
    assert record.get(F.RECEIVER_STATE_0) == 2
    assert len(slots(record)) == 10


def test_malformed_adapter_line_skips_wireless_group():
    record = assemble(wireless=snap(SourceId.WIRELESS, "X:2\nD:1,2,3,4,5, 6,7\n"))
    assert record.fields_size == 10
    assert record.get(F.ADAPTER_TYPE) == 3
    assert logged("Couldn't process")


def test_malformed_capability_line_keeps_translated_type():
    record = assemble(wireless=snap(SourceId.WIRELESS, "A:2\nD:1,2\n"))
    assert record.fields_size == 10
    assert record.get(F.ADAPTER_TYPE) == 102


def test_malformed_pca_is_treated_as_absent():
    record = assemble(pca=snap(SourceId.PCA, "D:zz\n"))
    assert record.fields_size == 10
    assert record.get(F.ADAPTER_TYPE) == 3
    assert logged("treat_absent")


def test_absent_snapshots_are_ignored():
    record = assemble(
        wireless=SideChannelSnapshot.absent(SourceId.WIRELESS),
        pca=SideChannelSnapshot.absent(SourceId.PCA),
    )
    assert record.fields_size == 10


def test_pca_hex_values_are_signed():
    record = assemble(pca=snap(SourceId.PCA, "D:ffffffff,1 2,3,4,5,6\n"))
    assert record.get(F.ADAPTER_TYPE) == AdapterType.USB_PD_PPS
    assert slots(record)[10:] == [-1, 1, 4, 5, 6, 2, 3]
