"""
DH Lotto — Target Site Selectors

DOM selectors on dhlottery.co.kr. The site owns this markup; any change on
their side breaks the matching stage.
"""

# Main page / login
LOGIN_LINK = 'a:has-text("로그인")'
LOGIN_LINK_NAME = "로그인"
USER_ID_INPUT = 'input[name="userId"]'
PASSWORD_INPUT = 'input[name="password"]'

# Password-change interstitial
PASSWORD_NOTICE_TITLE = '.header_article .sub_title:has-text("비밀번호 변경안내")'
PASSWORD_NOTICE_LATER = 'a.btn_common.lrg:has-text("다음에 변경")'

# Deposit balance
BALANCE = 'form[name="frmLogin"] .topAccount ul.information li.money strong'

# Navigation to the purchase widget
PURCHASE_MENU_TEXT = "복권구매"
LOTTO645_LINK = "#gnb .gnb1_1 a"
PURCHASE_IFRAME = "#ifrm_tab"

# Inside the purchase iframe
SALE_ALERT_MESSAGE = "#popupLayerAlert .layer-message"
SALE_ALERT_CONFIRM = "#popupLayerAlert .button.confirm"
AUTO_PICK_TAB = "#tabWay2Buy #num2"
AUTO_PICK_QUANTITY = "#divWay2Buy1 .amount #amoundApply"
AUTO_PICK_APPLY = '#divWay2Buy1 .amount input[type="button"]'
BUY_BUTTON = ".selected-games .footer #btnBuy"
BUY_CONFIRM = '#popupLayerConfirm .btns input[value="확인"]'
LIMIT_POPUP = "#recommend720Plus"
LIMIT_POPUP_CLOSE = '#recommend720Plus .btns a[href="javascript:closeRecomd720Popup();"]'

# Receipt overlay
RECEIPT = "#popReceipt"
RECEIPT_ROUND = "#popReceipt #buyRound"
RECEIPT_ISSUE_DATE = "#popReceipt #issueDay"
RECEIPT_AMOUNT = "#popReceipt #nBuyAmount"
RECEIPT_ROWS = "#popReceipt #reportRow li"
RECEIPT_ROW_LABEL = "strong span"
RECEIPT_ROW_NUMBERS = ".nums span"
RECEIPT_CLOSE = "#popReceipt #closeLayer"
