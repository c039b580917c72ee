"""Basel notification field registry.

Every regulatory field of the notification form is declared here, once.
The identifiers are the public data contract shared by the form client,
storage and both PDF outputs, so they are kept verbatim
(``"1_exporter_notifier_name"``, ``"14_waste_identification_un_number"``...).

The set is closed: writes carrying an identifier that is not a
:class:`FieldId` are rejected before they reach the database.

Field kinds
-----------
text      : single-line free text
textarea  : multi-line free text
integer   : whole number (e.g. shipment count)
decimal   : real number (e.g. quantity in tonnes)
checkbox  : stored as 0/1
date_part : month, day or year component of a composed date
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    INTEGER = "integer"
    DECIMAL = "decimal"
    CHECKBOX = "checkbox"
    DATE_PART = "date_part"


class FieldId(str, Enum):
    # Section 1: Exporter / Notifier
    EXPORTER_REGISTRATION_NO = "1_exporter_notifier_registration_no"
    EXPORTER_NAME = "1_exporter_notifier_name"
    EXPORTER_ADDRESS = "1_exporter_notifier_address"
    EXPORTER_CONTACT_PERSON = "1_exporter_notifier_contact_person"
    EXPORTER_TEL = "1_exporter_notifier_tel"
    EXPORTER_FAX = "1_exporter_notifier_fax"
    EXPORTER_EMAIL = "1_exporter_notifier_email"

    # Section 2: Importer / Consignee
    IMPORTER_REGISTRATION_NO = "2_importer_consignee_registration_no"
    IMPORTER_NAME = "2_importer_consignee_name"
    IMPORTER_ADDRESS = "2_importer_consignee_address"
    IMPORTER_CONTACT_PERSON = "2_importer_consignee_contact_person"
    IMPORTER_TEL = "2_importer_consignee_tel"
    IMPORTER_FAX = "2_importer_consignee_fax"
    IMPORTER_EMAIL = "2_importer_consignee_email"

    # Section 3: Notification details
    NOTIFICATION_NO = "3_notification_details_notification_no"
    INDIVIDUAL_SHIPMENT = "3_notification_details_individual_shipment"
    MULTIPLE_SHIPMENTS = "3_notification_details_multiple_shipments"
    OPERATION_DISPOSAL = "3_notification_details_operation_type_disposal"
    OPERATION_RECOVERY = "3_notification_details_operation_type_recovery"
    PRE_CONSENTED_YES = "3_notification_details_pre_consented_recovery_facility_yes"
    PRE_CONSENTED_NO = "3_notification_details_pre_consented_recovery_facility_no"

    # Section 4
    TOTAL_SHIPMENTS = "4_total_intended_shipments_count"

    # Section 5
    QUANTITY_TONNES = "5_total_intended_quantity_tonnes"
    QUANTITY_M3 = "5_total_intended_quantity_m3"

    # Section 6: Intended period
    FIRST_DEPARTURE_MONTH = "6_intended_period_first_departure_month"
    FIRST_DEPARTURE_DAY = "6_intended_period_first_departure_day"
    FIRST_DEPARTURE_YEAR = "6_intended_period_first_departure_year"
    LAST_DEPARTURE_MONTH = "6_intended_period_last_departure_month"
    LAST_DEPARTURE_DAY = "6_intended_period_last_departure_day"
    LAST_DEPARTURE_YEAR = "6_intended_period_last_departure_year"

    # Section 7: Packaging
    PACKAGING_DRUM = "7_packaging_type_drum"
    PACKAGING_WOODEN_BARREL = "7_packaging_type_wooden_barrel"
    PACKAGING_JERRICAN = "7_packaging_type_jerrican"
    PACKAGING_BOX = "7_packaging_type_box"
    PACKAGING_BAG = "7_packaging_type_bag"
    PACKAGING_COMPOSITE = "7_packaging_type_composite_packaging"
    PACKAGING_PRESSURE_RECEPTACLE = "7_packaging_type_pressure_receptacle"
    PACKAGING_BULK = "7_packaging_type_bulk"
    PACKAGING_OTHER = "7_packaging_type_other"
    SPECIAL_HANDLING_YES = "7_special_handling_yes"
    SPECIAL_HANDLING_NO = "7_special_handling_no"

    # Section 8: Intended carrier
    CARRIER_REGISTRATION_NO = "8_intended_carrier_registration_no"
    CARRIER_NAME = "8_intended_carrier_name"
    CARRIER_ADDRESS = "8_intended_carrier_address"
    CARRIER_CONTACT_PERSON = "8_intended_carrier_contact_person"
    CARRIER_TEL = "8_intended_carrier_tel"
    CARRIER_FAX = "8_intended_carrier_fax"
    CARRIER_EMAIL = "8_intended_carrier_email"
    TRANSPORT_ROAD = "8_intended_carrier_means_road"
    TRANSPORT_TRAIN = "8_intended_carrier_means_train"
    TRANSPORT_SEA = "8_intended_carrier_means_sea"
    TRANSPORT_AIR = "8_intended_carrier_means_air"
    TRANSPORT_INLAND_WATERWAYS = "8_intended_carrier_means_inland_waterways"

    # Section 9: Waste generator
    GENERATOR_REGISTRATION_NO = "9_waste_generator_registration_no"
    GENERATOR_NAME = "9_waste_generator_name"
    GENERATOR_ADDRESS = "9_waste_generator_address"
    GENERATOR_CONTACT_PERSON = "9_waste_generator_contact_person"
    GENERATOR_TEL = "9_waste_generator_tel"
    GENERATOR_FAX = "9_waste_generator_fax"
    GENERATOR_EMAIL = "9_waste_generator_email"
    GENERATOR_SITE = "9_waste_generator_site_process_generation"

    # Section 10: Disposal / recovery facility
    FACILITY_TYPE_DISPOSAL = "10_disposal_recovery_facility_type_disposal"
    FACILITY_TYPE_RECOVERY = "10_disposal_recovery_facility_type_recovery"
    FACILITY_REGISTRATION_NO = "10_disposal_recovery_facility_registration_no"
    FACILITY_NAME = "10_disposal_recovery_facility_name"
    FACILITY_ADDRESS = "10_disposal_recovery_facility_address"
    FACILITY_CONTACT_PERSON = "10_disposal_recovery_facility_contact_person"
    FACILITY_TEL = "10_disposal_recovery_facility_tel"
    FACILITY_FAX = "10_disposal_recovery_facility_fax"
    FACILITY_EMAIL = "10_disposal_recovery_facility_email"
    FACILITY_ACTUAL_SITE = "10_disposal_recovery_facility_actual_site"

    # Section 11: Operations
    OPERATION_CODE = "11_disposal_recovery_operations_d_code_r_code"
    OPERATION_TECHNOLOGY = "11_disposal_recovery_operations_technology"
    OPERATION_REASON_EXPORT = "11_disposal_recovery_operations_reason_export"

    # Section 12: Designation and composition
    WASTE_DESIGNATION = "12_waste_designation"
    WASTE_MAJOR_CONSTITUENTS = "12_waste_major_constituents_concentrations"
    WASTE_HAZARDOUS_CONSTITUENTS = "12_waste_hazardous_constituents_concentrations"
    CHEMICAL_ANALYSIS_YES = "12_waste_chemical_analysis_available_yes"
    CHEMICAL_ANALYSIS_NO = "12_waste_chemical_analysis_available_no"

    # Section 13: Physical characteristics
    PHYSICAL_POWDERY = "13_physical_characteristics_powdery"
    PHYSICAL_SOLID = "13_physical_characteristics_solid"
    PHYSICAL_VISCOUS = "13_physical_characteristics_viscous"
    PHYSICAL_SLUDGY = "13_physical_characteristics_sludgy"
    PHYSICAL_LIQUID = "13_physical_characteristics_liquid"
    PHYSICAL_GASEOUS = "13_physical_characteristics_gaseous"
    PHYSICAL_OTHER = "13_physical_characteristics_other"
    PHYSICAL_DESCRIPTION = "13_physical_characteristics_additional_description"

    # Section 14: Waste identification
    BASEL_ANNEX = "14_waste_identification_basel_annex"
    OECD_CODE = "14_waste_identification_oecd_code"
    EC_LIST = "14_waste_identification_ec_list"
    NATIONAL_CODE_EXPORT = "14_waste_identification_national_code_export"
    NATIONAL_CODE_IMPORT = "14_waste_identification_national_code_import"
    OTHER_CODE = "14_waste_identification_other_code"
    Y_CODE = "14_waste_identification_y_code"
    H_CODE = "14_waste_identification_h_code"
    UN_CLASS = "14_waste_identification_un_class"
    UN_NUMBER = "14_waste_identification_un_number"
    UN_SHIPPING_NAME = "14_waste_identification_un_shipping_name"
    CUSTOMS_CODE = "14_waste_identification_customs_code"

    # Section 15: Countries / states concerned
    EXPORT_STATE = "15_countries_states_export_state"
    EXPORT_AUTHORITY_CODE = "15_countries_states_export_authority_code"
    EXPORT_POINT_EXIT = "15_countries_states_export_point_exit"
    STATES_OF_TRANSIT = "15_countries_states_states_of_transit"
    IMPORT_STATE = "15_countries_states_import_state"
    IMPORT_AUTHORITY_CODE = "15_countries_states_import_authority_code"
    IMPORT_POINT_ENTRY = "15_countries_states_import_point_entry"

    # Section 16: Customs offices
    CUSTOMS_ENTRY_OFFICE = "16_customs_entry_office"
    CUSTOMS_EXIT_OFFICE = "16_customs_exit_office"
    CUSTOMS_EXPORT_OFFICE = "16_customs_export_office"

    # Section 17: Declaration
    DECLARATION_NOTIFIER_NAME = "17_exporter_declaration_notifier_name"
    DECLARATION_MONTH = "17_exporter_declaration_date_month"
    DECLARATION_DAY = "17_exporter_declaration_date_day"
    DECLARATION_YEAR = "17_exporter_declaration_date_year"
    DECLARATION_SIGNATURE_STATUS = "17_exporter_declaration_signature_status"
    GENERATOR_SIGNATURE_YES = "17_exporter_declaration_generator_signature_yes"
    GENERATOR_SIGNATURE_NO = "17_exporter_declaration_generator_signature_no"

    # Section 18: Annexes
    ANNEXES_TOTAL = "18_annexes_total_number_attached"
    ANNEXES_LIST = "18_annexes_list"
    ANNEX_CHEMICAL_ANALYSIS = "18_annexes_chemical_analysis_reports"
    ANNEX_FACILITY_PERMITS = "18_annexes_facility_permits"
    ANNEX_TRANSPORT_CONTRACTS = "18_annexes_transport_contracts"
    ANNEX_INSURANCE = "18_annexes_insurance_certificates"
    ANNEX_PROCESS_DESCRIPTIONS = "18_annexes_process_descriptions"
    ANNEX_SAFETY_DATA_SHEETS = "18_annexes_safety_data_sheets"
    ANNEX_ROUTING = "18_annexes_routing_information"
    ANNEX_EMERGENCY = "18_annexes_emergency_procedures"
    ANNEX_OTHER = "18_annexes_other_supporting_documents"


# ---------------------------------------------------------------------------
# Field specifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldSpec:
    """Static description of one form field."""

    field_id: FieldId
    section: int
    label: str
    kind: FieldKind
    group: str | None = None


SECTIONS: dict[int, str] = {
    1: "Exporter / Notifier",
    2: "Importer / Consignee",
    3: "Notification Details",
    4: "Total Intended Number of Shipments",
    5: "Total Intended Quantity",
    6: "Intended Period of Time for Shipments",
    7: "Packaging Type(s) and Special Handling",
    8: "Intended Carrier(s)",
    9: "Waste Generator(s) / Producer(s)",
    10: "Disposal / Recovery Facility",
    11: "Disposal / Recovery Operation(s)",
    12: "Designation and Composition of the Waste",
    13: "Physical Characteristics",
    14: "Waste Identification",
    15: "Countries / States Concerned",
    16: "Customs Offices",
    17: "Exporter's / Generator's Declaration",
    18: "Annexes Attached",
}

# Denominator for the completion percentage.
TOTAL_FORM_FIELDS = 115

_T = FieldKind.TEXT
_A = FieldKind.TEXTAREA
_I = FieldKind.INTEGER
_N = FieldKind.DECIMAL
_C = FieldKind.CHECKBOX
_D = FieldKind.DATE_PART


def _party(section: int, prefix: str) -> list[FieldSpec]:
    """Registration/name/address/contact block shared by sections 1, 2, 8, 9, 10."""
    rows = [
        ("registration_no", "Registration Number", _T),
        ("name", "Name", _T),
        ("address", "Address", _A),
        ("contact_person", "Contact Person", _T),
        ("tel", "Telephone", _T),
        ("fax", "Fax", _T),
        ("email", "Email", _T),
    ]
    return [
        FieldSpec(FieldId(f"{prefix}_{suffix}"), section, label, kind)
        for suffix, label, kind in rows
    ]


FIELD_SPECS: tuple[FieldSpec, ...] = (
    *_party(1, "1_exporter_notifier"),
    *_party(2, "2_importer_consignee"),
    FieldSpec(FieldId.NOTIFICATION_NO, 3, "Notification Number", _T),
    FieldSpec(FieldId.INDIVIDUAL_SHIPMENT, 3, "Individual Shipment", _C, "Shipment Type"),
    FieldSpec(FieldId.MULTIPLE_SHIPMENTS, 3, "Multiple Shipments", _C, "Shipment Type"),
    FieldSpec(FieldId.OPERATION_DISPOSAL, 3, "Disposal", _C, "Operation Type"),
    FieldSpec(FieldId.OPERATION_RECOVERY, 3, "Recovery", _C, "Operation Type"),
    FieldSpec(FieldId.PRE_CONSENTED_YES, 3, "Yes", _C, "Pre-consented Recovery Facility"),
    FieldSpec(FieldId.PRE_CONSENTED_NO, 3, "No", _C, "Pre-consented Recovery Facility"),
    FieldSpec(FieldId.TOTAL_SHIPMENTS, 4, "Total Number of Intended Shipments", _I),
    FieldSpec(FieldId.QUANTITY_TONNES, 5, "Total Quantity (Tonnes)", _N),
    FieldSpec(FieldId.QUANTITY_M3, 5, "Total Quantity (Cubic Meters)", _N),
    FieldSpec(FieldId.FIRST_DEPARTURE_MONTH, 6, "Month", _D, "First Departure"),
    FieldSpec(FieldId.FIRST_DEPARTURE_DAY, 6, "Day", _D, "First Departure"),
    FieldSpec(FieldId.FIRST_DEPARTURE_YEAR, 6, "Year", _D, "First Departure"),
    FieldSpec(FieldId.LAST_DEPARTURE_MONTH, 6, "Month", _D, "Last Departure"),
    FieldSpec(FieldId.LAST_DEPARTURE_DAY, 6, "Day", _D, "Last Departure"),
    FieldSpec(FieldId.LAST_DEPARTURE_YEAR, 6, "Year", _D, "Last Departure"),
    FieldSpec(FieldId.PACKAGING_DRUM, 7, "Drum", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_WOODEN_BARREL, 7, "Wooden Barrel", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_JERRICAN, 7, "Jerrican", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_BOX, 7, "Box", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_BAG, 7, "Bag", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_COMPOSITE, 7, "Composite Packaging", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_PRESSURE_RECEPTACLE, 7, "Pressure Receptacle", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_BULK, 7, "Bulk", _C, "Packaging Types"),
    FieldSpec(FieldId.PACKAGING_OTHER, 7, "Other Packaging Type (specify)", _T),
    FieldSpec(FieldId.SPECIAL_HANDLING_YES, 7, "Yes", _C, "Special Handling Required"),
    FieldSpec(FieldId.SPECIAL_HANDLING_NO, 7, "No", _C, "Special Handling Required"),
    *_party(8, "8_intended_carrier"),
    FieldSpec(FieldId.TRANSPORT_ROAD, 8, "Road", _C, "Means of Transport"),
    FieldSpec(FieldId.TRANSPORT_TRAIN, 8, "Train", _C, "Means of Transport"),
    FieldSpec(FieldId.TRANSPORT_SEA, 8, "Sea", _C, "Means of Transport"),
    FieldSpec(FieldId.TRANSPORT_AIR, 8, "Air", _C, "Means of Transport"),
    FieldSpec(FieldId.TRANSPORT_INLAND_WATERWAYS, 8, "Inland Waterways", _C, "Means of Transport"),
    *_party(9, "9_waste_generator"),
    FieldSpec(FieldId.GENERATOR_SITE, 9, "Site of Process of Waste Generation", _A),
    FieldSpec(FieldId.FACILITY_TYPE_DISPOSAL, 10, "Disposal", _C, "Facility Type"),
    FieldSpec(FieldId.FACILITY_TYPE_RECOVERY, 10, "Recovery", _C, "Facility Type"),
    *_party(10, "10_disposal_recovery_facility"),
    FieldSpec(FieldId.FACILITY_ACTUAL_SITE, 10, "Actual Site of Disposal/Recovery", _A),
    FieldSpec(FieldId.OPERATION_CODE, 11, "D-Code / R-Code", _T),
    FieldSpec(FieldId.OPERATION_TECHNOLOGY, 11, "Technology Employed", _A),
    FieldSpec(FieldId.OPERATION_REASON_EXPORT, 11, "Reason for Export", _A),
    FieldSpec(FieldId.WASTE_DESIGNATION, 12, "Designation and Composition of the Waste", _A),
    FieldSpec(FieldId.WASTE_MAJOR_CONSTITUENTS, 12, "Major Constituents and Concentrations", _A),
    FieldSpec(FieldId.WASTE_HAZARDOUS_CONSTITUENTS, 12, "Hazardous Constituents and Concentrations", _A),
    FieldSpec(FieldId.CHEMICAL_ANALYSIS_YES, 12, "Yes", _C, "Chemical Analysis Available"),
    FieldSpec(FieldId.CHEMICAL_ANALYSIS_NO, 12, "No", _C, "Chemical Analysis Available"),
    FieldSpec(FieldId.PHYSICAL_POWDERY, 13, "Powdery/Granular", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_SOLID, 13, "Solid", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_VISCOUS, 13, "Viscous", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_SLUDGY, 13, "Sludgy", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_LIQUID, 13, "Liquid", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_GASEOUS, 13, "Gaseous", _C, "Physical State"),
    FieldSpec(FieldId.PHYSICAL_OTHER, 13, "Other (specify)", _T),
    FieldSpec(FieldId.PHYSICAL_DESCRIPTION, 13, "Additional Description", _A),
    FieldSpec(FieldId.BASEL_ANNEX, 14, "Basel Annex", _T),
    FieldSpec(FieldId.OECD_CODE, 14, "OECD Code", _T),
    FieldSpec(FieldId.EC_LIST, 14, "EC List", _T),
    FieldSpec(FieldId.NATIONAL_CODE_EXPORT, 14, "National Code (Export)", _T),
    FieldSpec(FieldId.NATIONAL_CODE_IMPORT, 14, "National Code (Import)", _T),
    FieldSpec(FieldId.OTHER_CODE, 14, "Other Code", _T),
    FieldSpec(FieldId.Y_CODE, 14, "Y-Code", _T),
    FieldSpec(FieldId.H_CODE, 14, "H-Code", _T),
    FieldSpec(FieldId.UN_CLASS, 14, "UN Class", _T),
    FieldSpec(FieldId.UN_NUMBER, 14, "UN Number", _T),
    FieldSpec(FieldId.UN_SHIPPING_NAME, 14, "UN Shipping Name", _T),
    FieldSpec(FieldId.CUSTOMS_CODE, 14, "Customs Code", _T),
    FieldSpec(FieldId.EXPORT_STATE, 15, "State of Export", _T),
    FieldSpec(FieldId.EXPORT_AUTHORITY_CODE, 15, "Export Competent Authority Code", _T),
    FieldSpec(FieldId.EXPORT_POINT_EXIT, 15, "Point of Exit", _T),
    FieldSpec(FieldId.STATES_OF_TRANSIT, 15, "State(s) of Transit", _A),
    FieldSpec(FieldId.IMPORT_STATE, 15, "State of Import", _T),
    FieldSpec(FieldId.IMPORT_AUTHORITY_CODE, 15, "Import Competent Authority Code", _T),
    FieldSpec(FieldId.IMPORT_POINT_ENTRY, 15, "Point of Entry", _T),
    FieldSpec(FieldId.CUSTOMS_ENTRY_OFFICE, 16, "Customs Office of Entry", _T),
    FieldSpec(FieldId.CUSTOMS_EXIT_OFFICE, 16, "Customs Office of Exit", _T),
    FieldSpec(FieldId.CUSTOMS_EXPORT_OFFICE, 16, "Customs Office of Export", _T),
    FieldSpec(FieldId.DECLARATION_NOTIFIER_NAME, 17, "Exporter/Notifier Name", _T),
    FieldSpec(FieldId.DECLARATION_MONTH, 17, "Month", _D, "Declaration Date"),
    FieldSpec(FieldId.DECLARATION_DAY, 17, "Day", _D, "Declaration Date"),
    FieldSpec(FieldId.DECLARATION_YEAR, 17, "Year", _D, "Declaration Date"),
    FieldSpec(FieldId.DECLARATION_SIGNATURE_STATUS, 17, "Signature Status", _T),
    FieldSpec(FieldId.GENERATOR_SIGNATURE_YES, 17, "Yes", _C, "Generator Signature on Separate Sheet"),
    FieldSpec(FieldId.GENERATOR_SIGNATURE_NO, 17, "No", _C, "Generator Signature on Separate Sheet"),
    FieldSpec(FieldId.ANNEXES_TOTAL, 18, "Total Number of Annexes Attached", _I),
    FieldSpec(FieldId.ANNEXES_LIST, 18, "List of Annexes", _A),
    FieldSpec(FieldId.ANNEX_CHEMICAL_ANALYSIS, 18, "Chemical Analysis Reports", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_FACILITY_PERMITS, 18, "Facility Permits", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_TRANSPORT_CONTRACTS, 18, "Transport Contracts", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_INSURANCE, 18, "Insurance Certificates", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_PROCESS_DESCRIPTIONS, 18, "Process Descriptions", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_SAFETY_DATA_SHEETS, 18, "Safety Data Sheets", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_ROUTING, 18, "Routing Information", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_EMERGENCY, 18, "Emergency Procedures", _C, "Types of Annexes"),
    FieldSpec(FieldId.ANNEX_OTHER, 18, "Other Supporting Documents", _A),
)

FIELD_SPEC_BY_ID: dict[str, FieldSpec] = {spec.field_id.value: spec for spec in FIELD_SPECS}

FIELD_IDS: frozenset[str] = frozenset(FIELD_SPEC_BY_ID)

CHECKBOX_FIELD_IDS: frozenset[str] = frozenset(
    spec.field_id.value for spec in FIELD_SPECS if spec.kind is FieldKind.CHECKBOX
)

# Record keys that are not regulatory fields.
METADATA_KEYS: frozenset[str] = frozenset({
    "id",
    "submission_package_id",
    "created_by_user_id",
    "status",
    "progress_percentage",
    "created_at",
    "updated_at",
    "submitted_at",
})


def get_field_spec(field_id: str) -> FieldSpec:
    """Return the :class:`FieldSpec` for *field_id* or raise ``KeyError``."""
    try:
        return FIELD_SPEC_BY_ID[field_id]
    except KeyError:
        raise KeyError(f"Unknown field identifier: {field_id!r}")


def fields_in_section(section: int) -> list[FieldSpec]:
    """Return the specs of *section* in form order."""
    if section not in SECTIONS:
        raise ValueError(f"Unknown section {section!r}; must be 1-{len(SECTIONS)}")
    return [spec for spec in FIELD_SPECS if spec.section == section]
