"""Category labels shared across the package."""

FOOD = "อาหารและเครื่องดื่ม"
TRANSPORT = "การเดินทาง"
ESSENTIALS = "ของใช้จำเป็น"
HEALTH = "สุขภาพ"
CREDIT_LOAN = "สินเชื่อ บัตรเครดิต"
ENTERTAINMENT = "บันเทิง"
SHOPPING = "ช็อปปิ้ง"
UTILITIES = "สาธารณูปโภค"

INCOME = "รายได้"
OTHER = "อื่นๆ"
